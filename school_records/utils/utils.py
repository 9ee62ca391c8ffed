import uuid


def make_photo_object_name(student_id: int, file_name: str) -> str:
    """Object key for a student photo: ``{student_id}-{random}.{ext}``."""
    extension = file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else 'bin'
    return f"{student_id}-{uuid.uuid4().hex}.{extension}"

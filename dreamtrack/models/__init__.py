from dreamtrack.models.dreams import Dream, DreamTask

__all__ = [
    "Dream",
    "DreamTask",
]

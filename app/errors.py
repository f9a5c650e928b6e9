## app/errors.py


class SceneError(Exception):
    """Base class for scene-model errors."""


class SceneIntegrityError(SceneError):
    """A mutation referenced a character or dialogue line that does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"Unknown {kind} id: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class AnalysisError(Exception):
    """The image-analysis service could not produce character attributes."""


class ImageReadError(AnalysisError):
    """The uploaded file could not be read as an image."""

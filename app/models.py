## app/models.py

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr

from catalogs import BASE_LOCALE, CUSTOM_RACE, REGION_PREFIX


# ---- Spoken-language context (resolved once per character) ----

class BaseLocale(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["base"] = "base"


class RegionalLocale(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["regional"] = "regional"
    region: str


class OtherLocale(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["other"] = "other"
    name: str


LanguageContext = Union[BaseLocale, RegionalLocale, OtherLocale]


def resolve_language(label: str) -> LanguageContext:
    """Map an ethnicity label onto its language context.

    An empty label (e.g. the custom tag with no text yet) counts as the base locale.
    """
    if not label or label == BASE_LOCALE:
        return BaseLocale()
    if label.startswith(REGION_PREFIX):
        return RegionalLocale(region=label[len(REGION_PREFIX):])
    return OtherLocale(name=label)


# ---- Scene model ----

class Environment(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""
    style: str = ""
    lighting: str = ""
    camera_angle: str = ""
    shot_type: str = ""
    camera_movement: str = ""


class Character(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    race: str = BASE_LOCALE
    custom_race: str = ""
    gender: str = ""
    age: str = ""
    outfit: str = ""
    hairstyle: str = ""
    voice: str = ""
    description: str = ""
    look_at_camera: bool = False

    _language: LanguageContext = PrivateAttr(default_factory=BaseLocale)

    def model_post_init(self, __context) -> None:
        self._language = resolve_language(self.ethnicity)

    @property
    def ethnicity(self) -> str:
        """The tag, or the free-text override when the custom tag is selected."""
        return self.custom_race if self.race == CUSTOM_RACE else self.race

    @property
    def language(self) -> LanguageContext:
        return self._language


class Dialogue(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    character_id: str
    text: str = ""


class Scene(BaseModel):
    """Everything the renderer reads. No UI-only state lives here."""
    environment: Environment = Environment()
    characters: List[Character] = []
    dialogues: List[Dialogue] = []
    negative_prompt: str = ""


# ---- Typed partial updates ----

class CharacterUpdate(BaseModel):
    race: Optional[str] = None
    custom_race: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[str] = None
    outfit: Optional[str] = None
    hairstyle: Optional[str] = None
    voice: Optional[str] = None
    description: Optional[str] = None
    look_at_camera: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class DialogueUpdate(BaseModel):
    character_id: Optional[str] = None
    text: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class EnvironmentUpdate(BaseModel):
    description: Optional[str] = None
    style: Optional[str] = None
    lighting: Optional[str] = None
    camera_angle: Optional[str] = None
    shot_type: Optional[str] = None
    camera_movement: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ---- UI side table ----

class CharacterUIState(BaseModel):
    preview: Optional[bytes] = None
    analyzing: bool = False
    snapshot: Optional[Character] = None  # character as it was before analysis started


class CharacterAnalysis(BaseModel):
    """Best-effort attributes returned by the image-analysis service."""
    race: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[str] = None
    outfit: Optional[str] = None
    hairstyle: Optional[str] = None
    description: Optional[str] = None


# ---- Structured payload (fixed schema) ----

class PayloadMeta(BaseModel):
    generator: str
    version: str
    target_model: str


class RenderParameters(BaseModel):
    aspect_ratio: str
    resolution: str
    frame_rate: int
    sample_count: int


class CameraSpec(BaseModel):
    angle: str
    shot_type: str
    movement: str


class SceneSpec(BaseModel):
    environment: str
    lighting: str
    style: str
    camera: CameraSpec


class CharacterAttributes(BaseModel):
    race: str
    gender: str
    age: str
    outfit: str
    hairstyle: str
    voice: str
    eye_contact: bool


class CharacterSpec(BaseModel):
    id: str
    attributes: CharacterAttributes
    action: str


class DialogueSpec(BaseModel):
    speaker: str
    text: str


class StructuredData(BaseModel):
    scene: SceneSpec
    characters: List[CharacterSpec] = []
    dialogues: List[DialogueSpec] = []


class PromptPayload(BaseModel):
    meta: PayloadMeta
    prompt: str
    negative_prompt: str
    parameters: RenderParameters
    structured_data: StructuredData


class RenderedPrompts(BaseModel):
    """The four artifacts, always produced together."""
    indonesian: str
    english: str
    system_instruction: str
    payload: PromptPayload

    def payload_json(self, indent: Optional[int] = 2) -> str:
        return self.payload.model_dump_json(indent=indent)

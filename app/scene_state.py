## app/scene_state.py

import logging
import uuid
from typing import Dict, List, Optional

from catalogs import DEFAULT_NEGATIVE_PROMPT, INITIAL_CHARACTER, INITIAL_ENVIRONMENT
from errors import SceneIntegrityError
from models import (
    Character,
    CharacterUIState,
    CharacterUpdate,
    Dialogue,
    DialogueUpdate,
    Environment,
    EnvironmentUpdate,
    RenderedPrompts,
    Scene,
)
from prompting import render

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class SceneSession:
    """In-memory scene model for one user session.

    Characters and dialogue lines keep their insertion order. Deleting a
    character also deletes every dialogue line spoken by it, and dialogue lines
    can only point at characters that exist. Transient UI state (photo preview,
    analysis in progress) lives in a side table keyed by character id.
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        negative_prompt: str = DEFAULT_NEGATIVE_PROMPT,
        with_default_character: bool = True,
    ):
        self.environment = environment or Environment(**INITIAL_ENVIRONMENT)
        self.negative_prompt = negative_prompt
        self.characters: List[Character] = []
        self.dialogues: List[Dialogue] = []
        self.ui: Dict[str, CharacterUIState] = {}
        if with_default_character:
            self.add_character()

    # ---- lookups ----

    def _character_pos(self, char_id: str) -> int:
        for pos, c in enumerate(self.characters):
            if c.id == char_id:
                return pos
        raise SceneIntegrityError("character", char_id)

    def _dialogue_pos(self, dialogue_id: str) -> int:
        for pos, d in enumerate(self.dialogues):
            if d.id == dialogue_id:
                return pos
        raise SceneIntegrityError("dialogue", dialogue_id)

    def get_character(self, char_id: str) -> Character:
        return self.characters[self._character_pos(char_id)]

    def ui_state(self, char_id: str) -> CharacterUIState:
        self._character_pos(char_id)
        return self.ui.setdefault(char_id, CharacterUIState())

    # ---- characters ----

    def add_character(self, **fields) -> Character:
        values = {**INITIAL_CHARACTER, **fields, "id": _new_id()}
        character = Character(**values)
        self.characters.append(character)
        self.ui[character.id] = CharacterUIState()
        logger.debug("Added character %s", character.id)
        return character

    def update_character(self, char_id: str, update: CharacterUpdate) -> Character:
        pos = self._character_pos(char_id)
        current = self.characters[pos]
        # rebuild rather than copy so the language context is resolved again
        character = Character(**{**current.model_dump(), **update.changes()})
        self.characters[pos] = character
        return character

    def delete_character(self, char_id: str) -> None:
        pos = self._character_pos(char_id)
        del self.characters[pos]
        self.ui.pop(char_id, None)
        before = len(self.dialogues)
        self.dialogues = [d for d in self.dialogues if d.character_id != char_id]
        logger.debug("Deleted character %s and %d dialogue line(s)", char_id, before - len(self.dialogues))

    # ---- dialogues ----

    def add_dialogue(self, character_id: Optional[str] = None, text: str = "") -> Optional[Dialogue]:
        """Append a line, spoken by the first character unless told otherwise.

        Returns None when there is nobody to speak it.
        """
        if not self.characters:
            return None
        if character_id is None:
            character_id = self.characters[0].id
        else:
            self._character_pos(character_id)
        dialogue = Dialogue(id=_new_id(), character_id=character_id, text=text)
        self.dialogues.append(dialogue)
        return dialogue

    def update_dialogue(self, dialogue_id: str, update: DialogueUpdate) -> Dialogue:
        pos = self._dialogue_pos(dialogue_id)
        changes = update.changes()
        if "character_id" in changes:
            self._character_pos(changes["character_id"])
        dialogue = self.dialogues[pos].model_copy(update=changes)
        self.dialogues[pos] = dialogue
        return dialogue

    def delete_dialogue(self, dialogue_id: str) -> None:
        del self.dialogues[self._dialogue_pos(dialogue_id)]

    # ---- environment ----

    def update_environment(self, update: EnvironmentUpdate) -> Environment:
        self.environment = self.environment.model_copy(update=update.changes())
        return self.environment

    def set_negative_prompt(self, text: str) -> None:
        self.negative_prompt = text

    # ---- image analysis lifecycle ----

    def begin_analysis(self, char_id: str, preview: Optional[bytes] = None) -> None:
        state = self.ui_state(char_id)
        self.ui[char_id] = state.model_copy(
            update={"preview": preview, "analyzing": True, "snapshot": self.get_character(char_id)}
        )

    def finish_analysis(self, char_id: str, update: CharacterUpdate) -> Character:
        """Merge a normalized analysis result into the character."""
        character = self.update_character(char_id, update)
        self.ui[char_id] = self.ui_state(char_id).model_copy(update={"analyzing": False, "snapshot": None})
        return character

    def fail_analysis(self, char_id: str) -> Character:
        """Put the character back the way it was before the analysis started."""
        state = self.ui_state(char_id)
        pos = self._character_pos(char_id)
        if state.snapshot is not None:
            self.characters[pos] = state.snapshot
        self.ui[char_id] = state.model_copy(update={"analyzing": False, "snapshot": None})
        return self.characters[pos]

    # ---- rendering ----

    def scene(self) -> Scene:
        return Scene(
            environment=self.environment,
            characters=list(self.characters),
            dialogues=list(self.dialogues),
            negative_prompt=self.negative_prompt,
        )

    def render(self) -> RenderedPrompts:
        return render(self.scene())

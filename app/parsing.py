import json
import re
from typing import Optional

from pydantic import ValidationError

from catalogs import CUSTOM_RACE, match_race
from errors import AnalysisError
from models import CharacterAnalysis, CharacterUpdate

# --- Helpers for model output ---

# Fenced ```json ... ``` (or bare ```) block around the payload
_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _strip_fence(text: str) -> str:
    s = (text or "").strip()
    m = _FENCE.search(s)
    return m.group(1).strip() if m else s


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def parse_analysis(text: str) -> CharacterAnalysis:
    """Parse the analysis service's JSON answer. Unknown keys are ignored."""
    body = _strip_fence(text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Analysis response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AnalysisError("Analysis response must be a JSON object")
    # the service occasionally returns numbers (e.g. age) where strings are expected
    data = {k: str(v) if isinstance(v, (int, float)) else v for k, v in data.items()}
    try:
        return CharacterAnalysis.model_validate(data)
    except ValidationError as e:
        raise AnalysisError(f"Analysis response has unexpected fields: {e}") from e


def to_character_update(analysis: CharacterAnalysis) -> CharacterUpdate:
    """
    Map analysis output onto a full character update:
      - race is matched case-insensitively against the catalog; anything else
        becomes the custom tag with the raw text as the override
      - gender defaults to 'Pria'
      - missing text fields become empty strings
    """
    raw_race = _clean(analysis.race)
    race = match_race(raw_race)
    return CharacterUpdate(
        race=race or CUSTOM_RACE,
        custom_race="" if race else raw_race,
        gender=_clean(analysis.gender) or "Pria",
        age=_clean(analysis.age),
        outfit=_clean(analysis.outfit),
        hairstyle=_clean(analysis.hairstyle),
        description=_clean(analysis.description),
    )

## app/analysis.py

import io
import logging
from functools import lru_cache
from typing import Optional, Tuple

from google import genai
from google.genai import types
from PIL import Image, UnidentifiedImageError

from catalogs import CUSTOM_RACE, GENDER_OPTIONS, RACE_OPTIONS
from config import get_settings
from errors import AnalysisError, ImageReadError
from models import CharacterAnalysis
from parsing import parse_analysis

logger = logging.getLogger(__name__)

ANALYSIS_FIELDS = ["race", "gender", "age", "outfit", "hairstyle", "description"]

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={name: types.Schema(type=types.Type.STRING) for name in ANALYSIS_FIELDS},
    required=ANALYSIS_FIELDS,
)


def build_analysis_prompt() -> str:
    races = ", ".join(r for r in RACE_OPTIONS if r != CUSTOM_RACE)
    return (
        "PENTING: Respons Anda HARUS berupa objek JSON tunggal yang valid.\n"
        "Anda adalah asisten ahli analisis visual. Berdasarkan gambar yang diberikan, ekstrak informasi "
        "berikut dan kembalikan sebagai JSON. Semua nilai harus dalam Bahasa Indonesia.\n"
        f"- race: Pilih SATU dari daftar ini: {races}. Jika tidak ada yang cocok, pilih yang paling mendekati.\n"
        f"- gender: Pilih SATU dari daftar ini: {', '.join(GENDER_OPTIONS)}.\n"
        '- age: Perkirakan usia sebagai string angka (contoh: "32").\n'
        "- outfit: Deskripsikan pakaian yang dikenakan secara detail.\n"
        "- hairstyle: Deskripsikan gaya rambut secara detail.\n"
        "- description: Tulis deskripsi singkat satu kalimat tentang penampilan umum, ekspresi, "
        "atau tindakan orang dalam gambar."
    )


@lru_cache(maxsize=1)
def get_client() -> genai.Client:
    """Create the Gemini client once and cache it."""
    api_key = get_settings().google_api_key
    if not api_key:
        raise AnalysisError("GOOGLE_API_KEY is not set; image analysis is unavailable.")
    return genai.Client(api_key=api_key)


def load_image(data: bytes, mime_type: Optional[str] = None) -> Tuple[bytes, str]:
    """Check that the upload is a readable image and work out its mime type."""
    if mime_type and not mime_type.startswith("image/"):
        raise ImageReadError(f"Not an image file ({mime_type}).")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError) as e:
        raise ImageReadError(f"Could not read image: {e}") from e
    mime = Image.MIME.get(fmt) if fmt else None
    return data, mime or mime_type or "image/png"


def analyze_character_image(
    data: bytes,
    mime_type: Optional[str] = None,
    client: Optional[genai.Client] = None,
    model: Optional[str] = None,
) -> CharacterAnalysis:
    """Ask the vision model for a character's attributes. Raises AnalysisError on any failure."""
    data, mime = load_image(data, mime_type)
    client = client or get_client()
    model = model or get_settings().analysis_model

    logger.info("Analyzing character image (%s, %d bytes) with %s", mime, len(data), model)
    try:
        response = client.models.generate_content(
            model=model,
            contents=[types.Part.from_bytes(data=data, mime_type=mime), build_analysis_prompt()],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
    except Exception as e:
        logger.exception("Image analysis request failed")
        raise AnalysisError(f"Image analysis failed: {e}") from e

    if not response.text:
        raise AnalysisError("Image analysis returned an empty response.")
    return parse_analysis(response.text)

## app/prompting.py

from typing import Dict, List, NamedTuple, Optional, Tuple

from catalogs import GENDER_ENGLISH
from models import (
    BaseLocale,
    CameraSpec,
    Character,
    CharacterAttributes,
    CharacterSpec,
    DialogueSpec,
    LanguageContext,
    PayloadMeta,
    PromptPayload,
    RegionalLocale,
    RenderedPrompts,
    RenderParameters,
    Scene,
    SceneSpec,
    StructuredData,
)

PAYLOAD_META = PayloadMeta(
    generator="VEO3 Prompt Generator",
    version="1.2",
    target_model="VEO3 / Gemini Video",
)
RENDER_PARAMETERS = RenderParameters(aspect_ratio="16:9", resolution="1080p", frame_rate=24, sample_count=1)

UNASSIGNED_SPEAKER = "unassigned"
NEGATIVE_PROMPT_LABEL = "NEGATIVE PROMPT: "


class _CastMember(NamedTuple):
    index: int  # 1-based display index
    character: Character


class _Line(NamedTuple):
    speaker: Optional[_CastMember]
    text: str


def language_phrases(context: LanguageContext) -> Tuple[str, str]:
    """(indonesian phrase, english phrase) describing how a character speaks."""
    if isinstance(context, BaseLocale):
        return "Bahasa Indonesia", "Indonesian language"
    if isinstance(context, RegionalLocale):
        return (
            f"Bahasa Indonesia logat {context.region}",
            f"Indonesian language with {context.region} accent",
        )
    return f"Bahasa/Aksen {context.name}", f"{context.name} language/accent"


def _resolve(scene: Scene) -> Tuple[List[_CastMember], List[_Line]]:
    cast = [_CastMember(i, c) for i, c in enumerate(scene.characters, start=1)]
    by_id: Dict[str, _CastMember] = {m.character.id: m for m in cast}
    lines = [_Line(by_id.get(d.character_id), d.text) for d in scene.dialogues]
    return cast, lines


def negative_trailer(negative_prompt: str) -> str:
    return f"\n\n{NEGATIVE_PROMPT_LABEL}{negative_prompt}"


# ---- Narratives ----

def _indonesian_body(scene: Scene, cast: List[_CastMember], lines: List[_Line]) -> str:
    env = scene.environment
    out = [
        f"Video sinematik dengan gaya {env.style}.",
        f"Adegan berlatar di {env.description} dengan pencahayaan {env.lighting}.",
        f"Teknis Kamera: {env.shot_type}, {env.camera_angle}.",
        f"Gerakan Kamera: {env.camera_movement} (Lihat deskripsi teknis Inggris untuk presisi).",
        "",
        "KARAKTER:",
    ]
    for i, c in cast:
        gaze = (
            "Karakter MENATAP LANGSUNG ke kamera (kontak mata)."
            if c.look_at_camera
            else "Karakter tidak melihat ke kamera (candid)."
        )
        out.append(
            f"- Karakter {i}: Seorang {c.gender} ras {c.ethnicity} berusia {c.age} tahun. "
            f"Mengenakan {c.outfit}. Gaya rambut {c.hairstyle}. {gaze} Aksi/Deskripsi: {c.description}"
        )

    if lines:
        out += ["", "DIALOG (Naskah):"]
        for speaker, text in lines:
            if speaker is None:
                out.append(f'- Karakter: "{text}"')
                continue
            phrase, _ = language_phrases(speaker.character.language)
            out.append(f'- Karakter {speaker.index} ({phrase}): "{text}"')
    return "\n".join(out)


def _english_body(scene: Scene, cast: List[_CastMember], lines: List[_Line]) -> str:
    env = scene.environment
    out = [
        f"High quality cinematic video, {env.style} art style.",
        f"The environment is {env.description}, illuminated by {env.lighting}.",
        f"Camera specifications: {env.shot_type}, {env.camera_angle}.",
        f"Camera Movement: {env.camera_movement.upper()}.",
        "",
        "CHARACTERS:",
    ]
    for i, c in cast:
        gender = GENDER_ENGLISH.get(c.gender, "non-binary")
        gaze = (
            "LOOKING DIRECTLY AT CAMERA, making eye contact."
            if c.look_at_camera
            else "Not looking at camera, looking at surroundings."
        )
        out.append(
            f"- Character {i}: A {c.age}-year-old {c.ethnicity} {gender}. Wearing {c.outfit}. "
            f"{c.hairstyle} hairstyle. {gaze} Action/Description: {c.description}"
        )

    if lines:
        out += ["", "DIALOGUE SCRIPT:"]
        for speaker, text in lines:
            if speaker is None:
                out.append(f'- Character: "{text}"')
                continue
            _, phrase = language_phrases(speaker.character.language)
            out.append(f'- Character {speaker.index} [speaking in {phrase}]: "{text}"')
    return "\n".join(out)


# ---- System instruction ----

def _system_instruction(scene: Scene, cast: List[_CastMember]) -> str:
    env = scene.environment
    out = [
        "Role: Professional Cinematographer and Screenwriter.",
        f"Context: You are writing a scene set in {env.description}.",
        f"Technical Constraints: Style: {env.style}, Lighting: {env.lighting}, "
        f"Camera: {env.shot_type}/{env.camera_angle}, Movement: {env.camera_movement}.",
        "",
        "Characters:",
    ]
    for i, c in cast:
        out.append(
            f"[ID: {i}] Name: Character {i}, Details: {c.age}yo {c.gender} ({c.ethnicity}), "
            f"{c.outfit}, {c.hairstyle}. Mood/Action: {c.description}."
        )
    out += [
        "",
        "Task: Generate a detailed script, visual narration, or further dialogue for this scene "
        "while strictly adhering to the technical constraints and character descriptions provided above.",
    ]
    return "\n".join(out)


# ---- Structured payload ----

def _speaker_id(member: Optional[_CastMember]) -> str:
    return f"char_{member.index}" if member else UNASSIGNED_SPEAKER


def _payload(scene: Scene, cast: List[_CastMember], lines: List[_Line], english_body: str) -> PromptPayload:
    env = scene.environment
    return PromptPayload(
        meta=PAYLOAD_META,
        prompt=english_body,
        negative_prompt=scene.negative_prompt,
        parameters=RENDER_PARAMETERS,
        structured_data=StructuredData(
            scene=SceneSpec(
                environment=env.description,
                lighting=env.lighting,
                style=env.style,
                camera=CameraSpec(angle=env.camera_angle, shot_type=env.shot_type, movement=env.camera_movement),
            ),
            characters=[
                CharacterSpec(
                    id=_speaker_id(m),
                    attributes=CharacterAttributes(
                        race=m.character.ethnicity,
                        gender=m.character.gender,
                        age=m.character.age,
                        outfit=m.character.outfit,
                        hairstyle=m.character.hairstyle,
                        voice=m.character.voice,
                        eye_contact=m.character.look_at_camera,
                    ),
                    action=m.character.description,
                )
                for m in cast
            ],
            dialogues=[DialogueSpec(speaker=_speaker_id(s), text=t) for s, t in lines],
        ),
    )


def render(scene: Scene) -> RenderedPrompts:
    """Render the scene into the Indonesian and English narratives, the system
    instruction and the JSON payload.

    Pure: no I/O, no randomness. Dialogue lines pointing at a character that is
    not in the scene are rendered without a speaker index (``unassigned`` in the
    payload) instead of raising.
    """
    cast, lines = _resolve(scene)
    trailer = negative_trailer(scene.negative_prompt)
    english_body = _english_body(scene, cast, lines)
    return RenderedPrompts(
        indonesian=_indonesian_body(scene, cast, lines) + trailer,
        english=english_body + trailer,
        system_instruction=_system_instruction(scene, cast),
        payload=_payload(scene, cast, lines, english_body),
    )

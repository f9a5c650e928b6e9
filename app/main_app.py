import logging
from typing import List, Sequence, Union

import streamlit as st

from analysis import analyze_character_image
from catalogs import (
    CAMERA_ANGLE_OPTIONS,
    CAMERA_MOVEMENT_OPTIONS,
    CUSTOM_RACE,
    GENDER_OPTIONS,
    LIGHTING_OPTIONS,
    RACE_OPTIONS,
    SHOT_TYPE_OPTIONS,
    VOICE_OPTIONS,
    Option,
    option_label,
    option_values,
)
from config import configure_logging
from errors import AnalysisError, ImageReadError, SceneIntegrityError
from export_utils import artifact_files, make_bundle_zip
from models import Character, CharacterUpdate, DialogueUpdate, EnvironmentUpdate
from parsing import to_character_update
from scene_state import SceneSession

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="🎬 VEO3 Prompt Generator", page_icon="🎥", layout="wide")

st.title("🎬 VEO3 Prompt Generator")
st.caption("Susun adegan, karakter dan dialog; prompt Indonesia, Inggris, system instruction dan JSON diperbarui otomatis.")

# ---------- Session state ----------
if "scene" not in st.session_state:
    st.session_state.scene = SceneSession()
scene: SceneSession = st.session_state.scene

_CHARACTER_FIELDS = ["race", "custom_race", "gender", "age", "outfit", "hairstyle", "voice", "description", "look"]


def _reset_character_widgets(char_id: str) -> None:
    # widgets keep their own state; drop it so they pick up merged values
    for f in _CHARACTER_FIELDS:
        st.session_state.pop(f"{f}_{char_id}", None)


def _select(label: str, options: Sequence[Union[str, Option]], current: str, key: str) -> str:
    values = option_values(options)
    labels = dict(zip(values, (option_label(o) for o in options)))
    if current not in values:
        values = [current] + values  # keep unknown tags selectable instead of dropping them
    return st.selectbox(
        label, values, index=values.index(current), format_func=lambda v: labels.get(v, v), key=key
    )


# ---------- Sidebar: environment ----------
with st.sidebar:
    st.header("Lingkungan & Kamera")
    env = scene.environment
    env_update = EnvironmentUpdate(
        description=st.text_area("Deskripsi lingkungan", env.description, key="env_description"),
        style=st.text_input("Gaya visual", env.style, key="env_style"),
        lighting=_select("Pencahayaan", LIGHTING_OPTIONS, env.lighting, "env_lighting"),
        camera_angle=_select("Sudut kamera", CAMERA_ANGLE_OPTIONS, env.camera_angle, "env_angle"),
        shot_type=_select("Jenis shot", SHOT_TYPE_OPTIONS, env.shot_type, "env_shot"),
        camera_movement=_select("Gerakan kamera", CAMERA_MOVEMENT_OPTIONS, env.camera_movement, "env_movement"),
    )
    scene.update_environment(env_update)

    st.header("Negative Prompt")
    scene.set_negative_prompt(st.text_area("Hal yang harus dihindari", scene.negative_prompt, height=140, key="negative"))


def _character_card(pos: int, c: Character) -> None:
    ui = scene.ui_state(c.id)
    with st.container(border=True):
        head, delete = st.columns([5, 1])
        head.subheader(f"Karakter {pos}")
        if delete.button("🗑️ Hapus", key=f"del_{c.id}"):
            scene.delete_character(c.id)
            st.rerun()

        photo_col, form_col = st.columns([1, 2])
        with photo_col:
            upload = st.file_uploader(
                "Foto referensi", type=["png", "jpg", "jpeg", "webp"], key=f"photo_{c.id}", disabled=ui.analyzing
            )
            if ui.preview:
                st.image(ui.preview, use_container_width=True)
            if upload is not None and st.button("🔍 Analisis Foto", key=f"analyze_{c.id}"):
                _analyze(c.id, upload.getvalue(), upload.type)

        with form_col:
            race = _select("Ras / Etnis", RACE_OPTIONS, c.race, f"race_{c.id}")
            custom_race = c.custom_race
            if race == CUSTOM_RACE:
                custom_race = st.text_input("Ras kustom", c.custom_race, key=f"custom_race_{c.id}")
            left, right = st.columns(2)
            with left:
                gender = _select("Gender", GENDER_OPTIONS, c.gender, f"gender_{c.id}")
                age = st.text_input("Usia", c.age, key=f"age_{c.id}")
            with right:
                voice = _select("Suara", VOICE_OPTIONS, c.voice, f"voice_{c.id}")
                hairstyle = st.text_input("Gaya rambut", c.hairstyle, key=f"hairstyle_{c.id}")
            outfit = st.text_input("Pakaian", c.outfit, key=f"outfit_{c.id}")
            description = st.text_area("Deskripsi / Aksi", c.description, key=f"description_{c.id}")
            look = st.checkbox("Menatap kamera (kontak mata)", c.look_at_camera, key=f"look_{c.id}")

    scene.update_character(
        c.id,
        CharacterUpdate(
            race=race,
            custom_race=custom_race,
            gender=gender,
            age=age,
            outfit=outfit,
            hairstyle=hairstyle,
            voice=voice,
            description=description,
            look_at_camera=look,
        ),
    )


def _analyze(char_id: str, data: bytes, mime_type: str) -> None:
    scene.begin_analysis(char_id, preview=data)
    with st.spinner("Menganalisis Gambar..."):
        try:
            analysis = analyze_character_image(data, mime_type)
        except ImageReadError as e:
            scene.fail_analysis(char_id)
            st.error(f"Gagal membaca file gambar. Silakan coba file lain. ({e})")
            return
        except AnalysisError as e:
            scene.fail_analysis(char_id)
            st.error(f"Gagal menganalisis gambar. Pastikan gambar jelas dan coba lagi. ({e})")
            return
    scene.finish_analysis(char_id, to_character_update(analysis))
    _reset_character_widgets(char_id)
    st.rerun()


# ---------- Tabs ----------
T1, T2, T3 = st.tabs(["Karakter", "Dialog", "Prompt"])

with T1:
    for pos, c in enumerate(list(scene.characters), start=1):
        _character_card(pos, c)
    if st.button("➕ Tambah Karakter", use_container_width=True):
        scene.add_character()
        st.rerun()

with T2:
    if not scene.characters:
        st.info("Tambahkan karakter terlebih dahulu.")
    names = {c.id: f"Karakter {i}" for i, c in enumerate(scene.characters, start=1)}
    for d in list(scene.dialogues):
        speaker_col, text_col, del_col = st.columns([1, 4, 1])
        ids: List[str] = list(names)
        speaker = speaker_col.selectbox(
            "Pembicara",
            ids,
            index=ids.index(d.character_id) if d.character_id in ids else 0,
            format_func=names.get,
            key=f"speaker_{d.id}",
        )
        text = text_col.text_input("Dialog", d.text, key=f"text_{d.id}")
        if del_col.button("🗑️", key=f"del_dialogue_{d.id}"):
            scene.delete_dialogue(d.id)
            st.rerun()
        try:
            scene.update_dialogue(d.id, DialogueUpdate(character_id=speaker, text=text))
        except SceneIntegrityError as e:
            logger.warning("Skipping dialogue update: %s", e)
    if st.button("➕ Tambah Dialog", use_container_width=True, disabled=not scene.characters):
        scene.add_dialogue()
        st.rerun()

with T3:
    rendered = scene.render()
    files = artifact_files(rendered)
    outputs = [
        ("🇮🇩 Prompt Indonesia", rendered.indonesian, "text", "prompt_id.txt"),
        ("🇬🇧 Prompt Inggris (VEO3)", rendered.english, "text", "prompt_en.txt"),
        ("🤖 System Instruction", rendered.system_instruction, "text", "system_instruction.txt"),
        ("📦 JSON", files["prompt.json"], "json", "prompt.json"),
    ]
    for title, body, lang, file_name in outputs:
        st.subheader(title)
        st.code(body, language=lang)
        st.download_button(
            f"⬇️ {file_name}",
            data=body,
            file_name=file_name,
            mime="application/json" if lang == "json" else "text/plain",
            key=f"dl_{file_name}",
        )

    st.divider()
    st.download_button(
        "⬇️ Download Semua Prompt (ZIP)",
        data=make_bundle_zip(rendered),
        file_name="veo3_prompts.zip",
        mime="application/zip",
        use_container_width=True,
    )

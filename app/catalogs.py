## app/catalogs.py

from typing import List, NamedTuple, Optional, Sequence, Union

BASE_LOCALE = "Indonesia"
REGION_PREFIX = BASE_LOCALE + "-"
CUSTOM_RACE = "Lainnya..."


class Option(NamedTuple):
    value: str
    description: str


RACE_OPTIONS = [
    "Indonesia",
    "Indonesia-Jawa",
    "Indonesia-Sunda",
    "Indonesia-Minang",
    "Indonesia-Batak",
    "Indonesia-Padang",
    "Indonesia-Melayu",
    "Indonesia-Bugis",
    "Indonesia-Dayak",
    "Indonesia-Asmat",
    "Asia Tenggara",
    "Asia Timur",
    "Asia Selatan",
    "Timur Tengah",
    "Arab",
    "Afrika",
    "Eropa",
    "Hispanik/Latin",
    "Pribumi Amerika",
    CUSTOM_RACE,
]

GENDER_OPTIONS = ["Pria", "Wanita", "Non-Biner"]

# native tag -> english noun used in the english narrative
GENDER_ENGLISH = {
    "Pria": "male",
    "Wanita": "female",
    "Non-Biner": "non-binary",
}

VOICE_OPTIONS = [
    "Alto", "Bass", "Baritone", "Contralto", "Mezzo-soprano", "Soprano",
    "Tenor", "Serak", "Lembut", "Jernih", "Robotik",
]

LIGHTING_OPTIONS = [
    Option("cinematic lighting", "Pencahayaan dramatis seperti di film, kontras tinggi."),
    Option("natural light", "Cahaya alami dari matahari atau bulan."),
    Option("soft light", "Cahaya lembut dengan bayangan halus, cocok untuk potret."),
    Option("dramatic lighting", "Kontras tajam antara area terang dan gelap."),
    Option("studio lighting", "Pencahayaan terkontrol seperti di studio foto."),
    Option("golden hour", "Cahaya hangat dan keemasan saat matahari terbit/terbenam."),
    Option("blue hour", "Cahaya biru sejuk setelah matahari terbenam/sebelum terbit."),
    Option("neon lighting", "Pencahayaan dari lampu neon berwarna-warni."),
    Option("low-key lighting", "Didominasi bayangan dan area gelap, menciptakan misteri."),
    Option("high-key lighting", "Sangat terang dengan sedikit bayangan, menciptakan suasana ceria."),
]

CAMERA_ANGLE_OPTIONS = [
    Option("eye-level shot", "Kamera sejajar dengan mata subjek, sudut pandang normal."),
    Option("low angle shot", "Kamera lebih rendah dari subjek, membuatnya terlihat kuat/dominan."),
    Option("high angle shot", "Kamera lebih tinggi dari subjek, membuatnya terlihat lemah/rentan."),
    Option("dutch angle/tilt", "Kamera miring, menciptakan ketegangan atau disorientasi."),
    Option("bird's-eye view", "Tampilan dari atas langsung, seperti mata burung."),
    Option("worm's-eye view", "Tampilan dari bawah sekali, seperti mata cacing."),
    Option("over-the-shoulder shot", "Pengambilan gambar dari belakang bahu satu karakter, fokus pada karakter lain."),
]

SHOT_TYPE_OPTIONS = [
    Option("wide shot", "Menampilkan subjek sepenuhnya dalam lingkungannya."),
    Option("long shot", "Subjek terlihat dari kepala hingga kaki, lingkungan masih dominan."),
    Option("full shot", "Bingkai pas dengan subjek dari kepala hingga kaki."),
    Option("medium shot", "Menampilkan subjek dari pinggang ke atas."),
    Option("close-up shot", "Menampilkan wajah subjek untuk menekankan emosi."),
    Option("extreme close-up", "Fokus pada detail kecil, seperti mata atau bibir."),
    Option("establishing shot", "Biasanya wide shot di awal adegan untuk menunjukkan lokasi."),
    Option("point of view (POV) shot", "Menampilkan adegan dari sudut pandang karakter."),
]

CAMERA_MOVEMENT_OPTIONS = [
    Option("static camera", "Kamera diam di tempat (Tripod), tidak ada gerakan."),
    Option("slow zoom in", "Perlahan mendekat ke subjek, meningkatkan fokus/intensitas."),
    Option("fast zoom in", "Mendekat dengan cepat (Crash Zoom), efek kaget atau dramatis."),
    Option("slow zoom out", "Perlahan menjauh, mengungkap lebih banyak lingkungan."),
    Option("pan right", "Kamera menoleh ke kanan pada poros tetap."),
    Option("pan left", "Kamera menoleh ke kiri pada poros tetap."),
    Option("tilt up", "Kamera mendongak ke atas (mengungkap tinggi bangunan/karakter)."),
    Option("tilt down", "Kamera menunduk ke bawah."),
    Option("tracking shot", "Kamera bergerak mengikuti subjek yang sedang berjalan/berlari."),
    Option("truck left", "Kamera bergeser fisik ke kiri (sejajar subjek)."),
    Option("truck right", "Kamera bergeser fisik ke kanan (sejajar subjek)."),
    Option("dolly in", "Kamera fisik maju mendekati subjek (background berubah perspektif)."),
    Option("dolly out", "Kamera fisik mundur menjauhi subjek."),
    Option("arc shot", "Kamera bergerak melingkar mengelilingi subjek 360 derajat."),
    Option("handheld camera", "Gerakan kamera goyah/alami seperti dipegang tangan (realistis/tegang)."),
    Option("drone/aerial view", "Kamera terbang di udara, gerakan mulus dan luas."),
    Option("fpv drone", "Gerakan cepat dan akrobatik seperti drone balap."),
]

# --- Defaults for a fresh session ---

INITIAL_CHARACTER = {
    "race": "Indonesia",
    "custom_race": "",
    "gender": "Pria",
    "age": "25",
    "outfit": "Kaos putih dan celana jeans",
    "hairstyle": "Rambut pendek hitam",
    "voice": "Baritone",
    "description": "Seorang petualang yang pemberani.",
    "look_at_camera": False,
}

INITIAL_ENVIRONMENT = {
    "description": "Sebuah pasar malam yang ramai di Jakarta",
    "lighting": "neon lighting",
    "camera_angle": "eye-level shot",
    "shot_type": "medium shot",
    "camera_movement": "static camera",
    "style": "realistis, sinematik",
}

DEFAULT_NEGATIVE_PROMPT = (
    "bad quality, distorted, blurry, watermark, text overlay, bad anatomy, deformed, ugly, "
    "pixelated, low resolution, static camera (if movement requested), "
    "shaky camera (if static requested)"
)


def option_values(options: Sequence[Union[str, Option]]) -> List[str]:
    return [o if isinstance(o, str) else o.value for o in options]


def option_label(option: Union[str, Option]) -> str:
    """Label shown in select boxes: the bare tag, or 'tag - description'."""
    if isinstance(option, str):
        return option
    return f"{option.value} - {option.description}"


def match_race(text: Optional[str]) -> Optional[str]:
    """Case-insensitive lookup of free text in the race catalog (custom tag excluded)."""
    key = (text or "").strip().lower()
    if not key:
        return None
    for race in RACE_OPTIONS:
        if race != CUSTOM_RACE and race.lower() == key:
            return race
    return None

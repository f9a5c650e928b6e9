## app/export_utils.py

import io
import zipfile
from typing import Dict

from models import RenderedPrompts

# fixed entry timestamp: identical prompts give identical archives
_ZIP_DATE = (1980, 1, 1, 0, 0, 0)


def artifact_files(rendered: RenderedPrompts) -> Dict[str, str]:
    """File name -> contents for each of the four artifacts."""
    return {
        "prompt_id.txt": rendered.indonesian,
        "prompt_en.txt": rendered.english,
        "system_instruction.txt": rendered.system_instruction,
        "prompt.json": rendered.payload_json(indent=2),
    }


def make_bundle_zip(rendered: RenderedPrompts) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, text in artifact_files(rendered).items():
            info = zipfile.ZipInfo(name, date_time=_ZIP_DATE)
            info.compress_type = zipfile.ZIP_DEFLATED
            zf.writestr(info, text)
    return buf.getvalue()

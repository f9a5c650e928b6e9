"""
Export bundle tests
"""

import io
import json
import zipfile

from export_utils import artifact_files, make_bundle_zip


class TestExports:
    def test_artifact_files(self, market_scene):
        rendered = market_scene.render()
        files = artifact_files(rendered)
        assert set(files) == {"prompt_id.txt", "prompt_en.txt", "system_instruction.txt", "prompt.json"}
        assert files["prompt_en.txt"] == rendered.english
        assert json.loads(files["prompt.json"])["negative_prompt"] == "blurry"

    def test_zip_contains_all_artifacts(self, market_scene):
        rendered = market_scene.render()
        with zipfile.ZipFile(io.BytesIO(make_bundle_zip(rendered))) as zf:
            assert sorted(zf.namelist()) == sorted(artifact_files(rendered))
            assert zf.read("prompt_id.txt").decode("utf-8") == rendered.indonesian

    def test_zip_is_reproducible(self, market_scene):
        rendered = market_scene.render()
        assert make_bundle_zip(rendered) == make_bundle_zip(rendered)

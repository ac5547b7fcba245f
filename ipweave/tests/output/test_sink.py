"""Tests for the artifact file sink."""

import logging

from ipweave.config import GenerationOptions
from ipweave.generator.artifacts import ArtifactTree
from ipweave.output import ArtifactWriter


def make_tree(version):
    return ArtifactTree(
        base={"Blinky-base": f"base {version}", "regmap": {"csr": {"ctrl-base": f"rb {version}"}}},
        user={"Blinky": f"user {version}", "regmap": {"csr": {"ctrl": f"ru {version}"}}},
    )


class TestArtifactWriter:
    def test_paths_follow_the_tree(self, tmp_path):
        writer = ArtifactWriter(tmp_path)
        assert writer.path_for(("regmap", "csr", "ctrl-base")) == (
            tmp_path / "regmap" / "csr" / "ctrl-base.scala"
        )
        assert ArtifactWriter(tmp_path, ".txt").path_for(("X",)) == tmp_path / "X.txt"

    def test_extension_comes_from_options(self, tmp_path):
        writer = ArtifactWriter.from_options(tmp_path, GenerationOptions(file_extension="sc"))
        report = writer.write(make_tree(1))
        assert (tmp_path / "Blinky-base.sc").read_text() == "base 1"
        assert (tmp_path / "regmap" / "csr" / "ctrl.sc").read_text() == "ru 1"
        assert all(path.suffix == ".sc" for path in report.written)

    def test_first_write_creates_everything(self, tmp_path):
        report = ArtifactWriter(tmp_path).write(make_tree(1))
        assert len(report.written) == 4
        assert report.preserved == []
        assert (tmp_path / "Blinky-base.scala").read_text() == "base 1"
        assert (tmp_path / "regmap" / "csr" / "ctrl.scala").read_text() == "ru 1"

    def test_user_files_are_never_overwritten(self, tmp_path, caplog):
        writer = ArtifactWriter(tmp_path)
        writer.write(make_tree(1))
        (tmp_path / "Blinky.scala").write_text("edited by hand")

        with caplog.at_level(logging.WARNING):
            report = writer.write(make_tree(2))

        assert (tmp_path / "Blinky.scala").read_text() == "edited by hand"
        assert (tmp_path / "regmap" / "csr" / "ctrl.scala").read_text() == "ru 1"
        assert (tmp_path / "Blinky-base.scala").read_text() == "base 2"
        assert (tmp_path / "regmap" / "csr" / "ctrl-base.scala").read_text() == "rb 2"
        assert sorted(p.name for p in report.preserved) == ["Blinky.scala", "ctrl.scala"]
        assert "Preserving existing user file" in caplog.text

    def test_deleted_user_file_is_recreated(self, tmp_path):
        writer = ArtifactWriter(tmp_path)
        writer.write(make_tree(1))
        (tmp_path / "Blinky.scala").unlink()
        report = writer.write(make_tree(2))
        assert (tmp_path / "Blinky.scala").read_text() == "user 2"
        assert [p.name for p in report.preserved] == ["ctrl.scala"]

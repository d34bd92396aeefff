"""Tests for the command-line boundary."""

import json

import pytest

from cartoon_studio import cli
from cartoon_studio.domain.errors import EncodeError, JobFailedError
from cartoon_studio.domain.models import GenerationReport, GenerationResult, PublishResult, TimelineEntry

BASE_ARGS = ["--title", "Robot Picnic", "--script", "A robot packs a picnic. Ants arrive!", "--palette", "#111,#222,#333"]


class FakePipeline:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.calls = []
        FakePipeline.instances.append(self)

    def generate_and_publish(self, options, platforms):
        self.calls.append((options, list(platforms)))
        generation = GenerationResult(
            job_id="job1",
            timeline=[TimelineEntry("Storyboard synthesized", completed=True)],
            video_path="/tmp/job1.mp4",
            public_url="/generated/job1.mp4",
            frame_count=144,
        )
        return GenerationReport(generation, [PublishResult("youtube", "success", "ok")])


class BrokenPipeline(FakePipeline):
    def generate_and_publish(self, options, platforms):
        try:
            raise EncodeError("ffmpeg exited with code 1")
        except EncodeError as e:
            raise JobFailedError("job1", [TimelineEntry("Storyboard synthesized", completed=True)]) from e


@pytest.fixture(autouse=True)
def _reset_instances():
    FakePipeline.instances = []


def test_successful_run_prints_report(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "CartoonPipeline", FakePipeline)
    code = cli.main(BASE_ARGS + ["--platform", "youtube", "--output-dir", str(tmp_path)])

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["videoUrl"] == "/generated/job1.mp4"
    options, platforms = FakePipeline.instances[0].calls[0]
    assert options.palette == ["#111", "#222", "#333"]
    assert platforms == ["youtube"]


def test_failed_job_exits_non_zero(monkeypatch, capsys):
    monkeypatch.setattr(cli, "CartoonPipeline", BrokenPipeline)
    assert cli.main(BASE_ARGS) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Failed to generate" in captured.err


def test_script_file(monkeypatch, tmp_path):
    script = tmp_path / "script.txt"
    script.write_text("Line one is here.\nLine two is here.", encoding="utf-8")
    monkeypatch.setattr(cli, "CartoonPipeline", FakePipeline)

    assert cli.main(["--title", "Robot Picnic", "--script-file", str(script), "--palette", "#111"]) == 0
    options, _ = FakePipeline.instances[0].calls[0]
    assert options.script.startswith("Line one")


@pytest.mark.parametrize(
    "args",
    [
        ["--title", "ab", "--script", "long enough script", "--palette", "#111"],
        ["--title", "Robot", "--script", "short", "--palette", "#111"],
        ["--title", "Robot", "--script", "long enough script"],
        ["--title", "Robot", "--script", "long enough script", "--palette", ",".join(["#111"] * 9)],
        ["--title", "Robot", "--script", "long enough script", "--palette", "#111", "--style", "x"],
        ["--title", "Robot", "--script", "long enough script", "--palette", "#111", "--platform", "myspace"],
    ],
)
def test_boundary_validation(args, monkeypatch):
    monkeypatch.setattr(cli, "CartoonPipeline", FakePipeline)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(args)
    assert excinfo.value.code == 2
    assert FakePipeline.instances == []


def test_split_palette():
    assert cli.split_palette(["#111, #222", "#333", " "]) == ["#111", "#222", "#333"]

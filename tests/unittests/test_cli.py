import pytest
from typer.testing import CliRunner

from makeinsertions.api.codec import read_image, write_image
from makeinsertions.cli import app

runner = CliRunner()


@pytest.fixture
def images(tmp_path, make_image):
    """Insert and template files on disk."""
    insert_path = write_image(make_image(20, 20, (255, 0, 0)), tmp_path / "insert.png")
    target_path = write_image(make_image(200, 200, (0, 0, 255)), tmp_path / "target.png")
    return insert_path, target_path, tmp_path / "out.png"


def test_insert_and_display(images):
    insert_path, target_path, output_path = images
    result = runner.invoke(
        app,
        [
            "insert",
            str(insert_path),
            str(target_path),
            str(output_path),
            "-w",
            "50x50+10+10",
            "-w",
            "40x40+100+100/30",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "insert_loc_1: 40x40+100+100/30" in result.output
    assert "insert_loc_2: 50x50+10+10" in result.output
    assert output_path.exists()

    output = read_image(output_path)
    assert output.pixelColor(35, 35).getRgb()[:3] == (255, 0, 0)
    assert output.pixelColor(120, 120).getRgb()[:3] == (255, 0, 0)
    assert output.pixelColor(5, 5).getRgb()[:3] == (0, 0, 255)
    assert output.pixelColor(180, 30).getRgb()[:3] == (0, 0, 255)

    result = runner.invoke(app, ["display", str(output_path)])
    assert result.exit_code == 0
    assert "1: 40x40+100+100/30" in result.output
    assert "2: 50x50+10+10" in result.output


def test_insert_with_options(images):
    insert_path, target_path, output_path = images
    result = runner.invoke(
        app,
        [
            "insert",
            "-i",
            str(insert_path),
            "-t",
            str(target_path),
            "-o",
            str(output_path),
            "--insert-spec",
            "30x30+0+0",
        ],
    )
    assert result.exit_code == 0, result.output
    assert read_image(output_path).text("insert_loc_1") == "30x30+0+0"


def test_insert_reuses_template_regions(images, tmp_path):
    insert_path, target_path, output_path = images
    runner.invoke(
        app,
        ["insert", str(insert_path), str(target_path), str(output_path), "-w", "60x60+5+5"],
    )

    second = tmp_path / "second.png"
    result = runner.invoke(app, ["insert", str(insert_path), str(output_path), str(second)])
    assert result.exit_code == 0, result.output
    assert read_image(second).text("insert_loc_1") == "60x60+5+5"


def test_insert_without_any_regions_fails(images):
    insert_path, target_path, output_path = images
    result = runner.invoke(
        app, ["insert", str(insert_path), str(target_path), str(output_path)]
    )
    assert result.exit_code == 1
    assert not output_path.exists()


@pytest.mark.parametrize(
    "specs",
    [
        ["-w", "garbage"],
        ["-w", "0x0+0+0"],
        ["-w", "10x10+0+0/10", "-w", "10x10+0+0/10"],
    ],
)
def test_insert_rejects_bad_specs(images, specs):
    insert_path, target_path, output_path = images
    result = runner.invoke(
        app, ["insert", str(insert_path), str(target_path), str(output_path), *specs]
    )
    assert result.exit_code == 1
    assert "Error" in result.output
    assert not output_path.exists()


def test_coalesce_flag(images):
    insert_path, target_path, output_path = images
    result = runner.invoke(
        app,
        [
            "insert",
            str(insert_path),
            str(target_path),
            str(output_path),
            "-w",
            "10x10+0+0/0",
            "-w",
            "10x10+0+0",
            "--coalesce-duplicates",
        ],
    )
    assert result.exit_code == 0, result.output
    assert read_image(output_path).text("insert_loc_2") == ""


def test_insert_missing_image(images, tmp_path):
    _, target_path, output_path = images
    result = runner.invoke(
        app,
        ["insert", str(tmp_path / "nope.png"), str(target_path), str(output_path), "-w", "1x1+0+0"],
    )
    assert result.exit_code == 1
    assert "nope.png" in result.output


def test_insert_requires_three_images(images):
    insert_path, target_path, _ = images
    result = runner.invoke(app, ["insert", str(insert_path), str(target_path), "-w", "1x1+0+0"])
    assert result.exit_code == 1


def test_display_without_regions(images):
    _, target_path, _ = images
    result = runner.invoke(app, ["display", str(target_path)])
    assert result.exit_code == 0
    assert "No insertions recorded" in result.output


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "MakeInsertions version" in result.output
    assert "PySide6" in result.output


def test_display_uses_config_prefix(images, tmp_path):
    insert_path, target_path, output_path = images
    config_path = tmp_path / "settings.py"
    config_path.write_text(
        "insertion_config = {\n"
        "    'metadata_key_prefix': 'region_',\n"
        "    'count_key': 'regions',\n"
        "}\n"
    )

    result = runner.invoke(
        app,
        [
            "insert",
            str(insert_path),
            str(target_path),
            str(output_path),
            "-w",
            "30x30+5+5",
            "--config",
            str(config_path),
        ],
    )
    assert result.exit_code == 0, result.output
    assert read_image(output_path).text("region_1") == "30x30+5+5"

    result = runner.invoke(app, ["display", str(output_path), "--config", str(config_path)])
    assert result.exit_code == 0, result.output
    assert "1: 30x30+5+5" in result.output

    result = runner.invoke(app, ["display", str(output_path)])
    assert "No insertions recorded" in result.output


def test_display_rejects_bad_config(images, tmp_path):
    _, target_path, _ = images
    result = runner.invoke(
        app, ["display", str(target_path), "--config", str(tmp_path / "missing.py")]
    )
    assert result.exit_code == 1
    assert "missing.py" in result.output

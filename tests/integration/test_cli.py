import json
import pytest
import yaml
from click.testing import CliRunner
from tagmap.CLI.main import cli


@pytest.fixture
def images_file(tmp_path):
    path = tmp_path / "images.txt"
    path.write_text("foo\nbar:2.0\n")
    return path


@pytest.fixture
def task_env(images_file):
    return {
        "INPUT_IMAGENAMESPATH": str(images_file),
        "INPUT_INCLUDELATESTTAG": "true",
        "INPUT_ADDITIONALIMAGETAGS": "v1",
    }


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'compute the image tags' in result.output


def test_cli_map(task_env):
    runner = CliRunner()
    result = runner.invoke(cli, ['map'], env=task_env, obj={})
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "foo -> foo:v1",
        "foo -> foo:latest",
        "bar:2.0 -> bar:2.0",
        "bar:2.0 -> bar:v1",
        "bar:2.0 -> bar:latest",
    ]


def test_cli_map_json_qualified(task_env):
    task_env = dict(task_env, INPUT_QUALIFYIMAGENAME="true")
    runner = CliRunner()
    result = runner.invoke(cli, ['--registry', 'https://myregistry.azurecr.io', 'map', '--format', 'json'],
                           env=task_env, obj={})
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data[0] == {"sourceImageName": "foo", "targetImageName": "myregistry.azurecr.io/foo:v1"}
    assert len(data) == 5


def test_cli_names(task_env):
    runner = CliRunner()
    result = runner.invoke(cli, ['names'], env=task_env, obj={})
    assert result.exit_code == 0
    assert result.output.splitlines() == ["foo", "bar:2.0"]


def test_cli_missing_input():
    runner = CliRunner()
    result = runner.invoke(cli, ['map'], env={"INPUT_IMAGENAMESPATH": ""}, obj={})
    assert result.exit_code == 1
    assert 'Input required: imageNamesPath' in result.output


def test_cli_empty_images_file(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("\n  \n")
    runner = CliRunner()
    result = runner.invoke(cli, ['map'], env={"INPUT_IMAGENAMESPATH": str(empty)}, obj={})
    assert result.exit_code == 1
    assert f'No images found in image names file: {empty}' in result.output


def test_cli_yaml_config(tmp_path, images_file):
    config_file = tmp_path / "tagmap.yml"
    with open(config_file, 'w') as f:
        yaml.dump({'image_names_path': images_file.name, 'additional_image_tags': ['stable']}, f)

    runner = CliRunner()
    result = runner.invoke(cli, ['-c', str(config_file), 'map'], env={"INPUT_IMAGENAMESPATH": ""}, obj={})
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "foo -> foo:stable",
        "foo -> foo:latest",
        "bar:2.0 -> bar:2.0",
        "bar:2.0 -> bar:stable",
    ]


def test_cli_env_file(tmp_path, images_file):
    env_file = tmp_path / ".env"
    env_file.write_text(f"INPUT_IMAGENAMESPATH={images_file}\nINPUT_INCLUDELATESTTAG=true\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(env_file), 'map'], env={"INPUT_IMAGENAMESPATH": None}, obj={})
    assert result.exit_code == 0
    assert "bar:2.0 -> bar:latest" in result.output


def test_cli_script(tmp_path, task_env):
    out = tmp_path / "tag.sh"
    runner = CliRunner()
    result = runner.invoke(cli, ['script', '--out', str(out), '--push'], env=task_env, obj={})
    assert result.exit_code == 0
    assert 'Tag script with 5 operation(s)' in result.output
    content = out.read_text()
    assert "docker tag bar:2.0 bar:latest" in content
    assert "docker push bar:latest" in content


def test_cli_malformed_yaml_config(tmp_path):
    config_file = tmp_path / "tagmap.yml"
    config_file.write_text("image_names_path: [unclosed\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['-c', str(config_file), 'map'], obj={})
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert 'Malformed configuration file' in result.output


def test_cli_undecodable_images_file(tmp_path):
    images = tmp_path / "images.txt"
    images.write_bytes(b"foo\xff\n")
    runner = CliRunner()
    for command in ('map', 'names'):
        result = runner.invoke(cli, [command], env={"INPUT_IMAGENAMESPATH": str(images)}, obj={})
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert 'Error:' in result.output


def test_cli_yaml_source_tags(tmp_path, images_file):
    config_file = tmp_path / "tagmap.yml"
    with open(config_file, 'w') as f:
        yaml.dump({
            'image_names_path': images_file.name,
            'include_source_tags': True,
            'source_tags': ['release-3'],
        }, f)

    runner = CliRunner()
    result = runner.invoke(cli, ['-c', str(config_file), 'map'], obj={})
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "foo -> foo:release-3",
        "foo -> foo:latest",
        "bar:2.0 -> bar:2.0",
        "bar:2.0 -> bar:release-3",
    ]

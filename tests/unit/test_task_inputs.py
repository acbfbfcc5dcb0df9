import pytest
from tagmap.CONFIG.task_inputs import TaskInputs
from tagmap.exceptions import ConfigurationError


def test_get_input():
    inputs = TaskInputs({"INPUT_IMAGENAMESPATH": "  images.txt "})
    assert inputs.get_input("imageNamesPath") == "images.txt"
    assert inputs.get_input("missing") is None


def test_get_input_required():
    with pytest.raises(ConfigurationError, match="imageNamesPath"):
        TaskInputs({}).get_input("imageNamesPath", required=True)


def test_get_bool_input():
    inputs = TaskInputs({
        "INPUT_A": "true",
        "INPUT_B": "TRUE",
        "INPUT_C": "yes",
        "INPUT_D": "false",
    })
    assert inputs.get_bool_input("a") is True
    assert inputs.get_bool_input("b") is True
    assert inputs.get_bool_input("c") is False
    assert inputs.get_bool_input("d") is False
    assert inputs.get_bool_input("e") is False


def test_get_delimited_input():
    inputs = TaskInputs({"INPUT_ADDITIONALIMAGETAGS": "v1\n\n  stable \r\nv1\n"})
    assert inputs.get_delimited_input("additionalImageTags", "\n") == ["v1", "stable", "v1"]
    assert inputs.get_delimited_input("other", "\n") == []


def test_get_path_input(tmp_path):
    existing = tmp_path / "images.txt"
    existing.write_text("nginx")
    inputs = TaskInputs({"INPUT_GOOD": str(existing), "INPUT_BAD": str(tmp_path / "nope.txt")})
    assert inputs.get_path_input("good", required=True, check_exists=True) == str(existing)
    assert inputs.get_path_input("bad") == str(tmp_path / "nope.txt")
    with pytest.raises(ConfigurationError, match="Not found"):
        inputs.get_path_input("bad", check_exists=True)


def test_get_variable():
    inputs = TaskInputs({"BUILD_REPOSITORY_PROVIDER": "GitHub"})
    assert inputs.get_variable("Build.Repository.Provider") == "GitHub"
    assert inputs.get_variable("Build.SourceVersion") is None


def test_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("INPUT_INCLUDELATESTTAG=true\nINPUT_QUALIFYIMAGENAME=true\n")
    inputs = TaskInputs.from_env_file(str(env_file), environ={"INPUT_QUALIFYIMAGENAME": "false"})
    assert inputs.get_bool_input("includeLatestTag") is True
    assert inputs.get_bool_input("qualifyImageName") is False


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("INPUT_INCLUDESOURCETAGS", "true")
    assert TaskInputs().get_bool_input("includeSourceTags") is True

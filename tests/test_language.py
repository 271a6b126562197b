import dataclasses

import pytest

from atcoder_tool.language import LANGUAGES, Language, find_language


def _mock_language():
    return Language(
        name="mock",
        main_file="main.mock",
        build_cmd=("mock", "build"),
        run_cmd=("./main_mock",),
        cleanup_cmd=("mock_rm", "main_mock"),
    )


@pytest.mark.parametrize(
    "name, main_file",
    [("go", "main.go"), ("cpp", "main.cpp"), ("python", "main.py"), ("zig", "main.zig")],
)
def test_find_language_main_file(name, main_file):
    assert find_language(name).main_file == main_file


def test_python_has_no_build_or_cleanup_step():
    python = find_language("python")
    assert python.build_cmd == ()
    assert python.cleanup_cmd == ()
    assert python.run_cmd == ("python3", "main.py")


def test_compiled_languages_commands():
    assert find_language("cpp").build_cmd == ("g++", "-o", "main", "main.cpp")
    assert find_language("go").cleanup_cmd == ("rm", "main")
    assert find_language("zig").run_cmd == ("./main",)


def test_detection_order():
    found = [find_language(name) for name in ("go", "cpp", "python", "zig")]
    assert [LANGUAGES.index(language) for language in found] == [0, 1, 2, 3]


def test_unknown_language_raises():
    with pytest.raises(ValueError, match="rust"):
        find_language("rust")


def test_language_is_frozen():
    language = _mock_language()
    with pytest.raises(dataclasses.FrozenInstanceError):
        language.name = "other"
    assert language.name == "mock"
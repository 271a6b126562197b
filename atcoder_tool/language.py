"""Languages whose solutions can be built, run and cleaned up."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """How to build, run and clean up a solution written in one language."""

    name: str
    main_file: str
    build_cmd: tuple[str, ...] = ()
    run_cmd: tuple[str, ...] = ()
    cleanup_cmd: tuple[str, ...] = ()


LANGUAGES: tuple[Language, ...] = (
    Language(
        name="go",
        main_file="main.go",
        build_cmd=("go", "build", "-o", "main", "main.go"),
        run_cmd=("./main",),
        cleanup_cmd=("rm", "main"),
    ),
    Language(
        name="cpp",
        main_file="main.cpp",
        build_cmd=("g++", "-o", "main", "main.cpp"),
        run_cmd=("./main",),
        cleanup_cmd=("rm", "main"),
    ),
    Language(
        name="python",
        main_file="main.py",
        run_cmd=("python3", "main.py"),
    ),
    Language(
        name="zig",
        main_file="main.zig",
        build_cmd=("zig", "build", "main.zig"),
        run_cmd=("./main",),
        cleanup_cmd=("rm", "main"),
    ),
)


def find_language(name: str) -> Language:
    """Return the known language called ``name``."""
    for language in LANGUAGES:
        if language.name == name:
            return language
    raise ValueError(f"unknown language: {name}")
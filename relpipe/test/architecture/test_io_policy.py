from __future__ import annotations

import ast

from ._utils import iter_source_files, matches_prefix, package_root, parse_imports, read_tree


def _direct_subprocess_calls(tree: ast.AST) -> list[int]:
    lines: list[int] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        if not isinstance(func, ast.Attribute):
            continue
        if func.attr not in {"run", "call", "check_call", "check_output", "Popen"}:
            continue
        if isinstance(func.value, ast.Name) and func.value.id == "subprocess":
            lines.append(node.lineno)
    return lines


def test_subprocess_is_only_called_from_platform_process() -> None:
    root = package_root()
    offenders: list[str] = []
    for file_path in iter_source_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() == "platform/process.py":
            continue
        for line in _direct_subprocess_calls(read_tree(file_path)):
            offenders.append(f"{rel}:{line}: direct subprocess call")

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)


def test_rich_is_only_imported_by_the_console() -> None:
    root = package_root()
    offenders: list[str] = []
    for file_path in iter_source_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() == "output/console.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}: direct rich import '{item.module}'")

    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)

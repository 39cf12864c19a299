"""Static import boundary guard for the layered package.

Two rules are enforced:

* cross-layer imports listed in ``FORBIDDEN_IMPORTS`` (the domain layer sits
  at the bottom and imports nothing above it);
* the domain layer stays free of web/runtime libraries, so the hours engine
  can be used without the HTTP or CLI stack installed.
"""

from __future__ import annotations

import argparse
import ast
from dataclasses import dataclass
from pathlib import Path

PACKAGE = "venue_hours"
KNOWN_LAYERS = {"api", "application", "adapters", "config", "domain", "infrastructure"}
FORBIDDEN_IMPORTS = {
    ("domain", "api"): "domain layer must not import api layer",
    ("domain", "application"): "domain layer must not import application layer",
    ("domain", "adapters"): "domain layer must not import adapters layer",
    ("domain", "config"): "domain layer must not import config layer",
    ("domain", "infrastructure"): "domain layer must not import infrastructure layer",
    ("adapters", "api"): "adapters layer must not import api layer",
    ("adapters", "application"): "adapters layer must not import application layer",
    ("application", "api"): "application layer must not import api layer",
}
DOMAIN_FORBIDDEN_LIBRARIES = {"fastapi", "starlette", "dotenv", "httpx"}


@dataclass(frozen=True)
class ImportRecord:
    source_file: Path
    source_module: str
    source_layer: str | None
    target_module: str
    target_layer: str | None
    lineno: int

    @property
    def target_root(self) -> str:
        return self.target_module.split(".", 1)[0]


def _module_name(path: Path, package_root: Path) -> str:
    parts = list(path.relative_to(package_root.parent).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _layer_of(module_name: str) -> str | None:
    parts = module_name.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in KNOWN_LAYERS else None


def _relative_target(source_module: str, is_package: bool, level: int, module: str | None) -> str | None:
    package_parts = source_module.split(".") if is_package else source_module.split(".")[:-1]
    if level - 1 > len(package_parts):
        return None
    base = package_parts[: len(package_parts) - (level - 1)]
    if module:
        base.extend(module.split("."))
    return ".".join(base) or None


def _targets(node: ast.AST, source_module: str, is_package: bool) -> list[str]:
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    if not isinstance(node, ast.ImportFrom):
        return []
    if node.level == 0:
        return [node.module] if node.module else []

    base = _relative_target(source_module, is_package, node.level, node.module)
    if base is None:
        return []
    if node.module:
        return [base]
    return [f"{base}.{alias.name}" for alias in node.names if alias.name != "*"]


def collect_import_records(root: str | Path = PACKAGE) -> list[ImportRecord]:
    package_root = Path(root).resolve()
    records: list[ImportRecord] = []

    for path in sorted(package_root.rglob("*.py")):
        if "__pycache__" in path.parts:
            continue
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (OSError, SyntaxError, UnicodeDecodeError):
            continue

        source_module = _module_name(path, package_root)
        source_layer = _layer_of(source_module)
        is_package = path.name == "__init__.py"

        for node in ast.walk(tree):
            for target in _targets(node, source_module, is_package):
                records.append(
                    ImportRecord(
                        source_file=path,
                        source_module=source_module,
                        source_layer=source_layer,
                        target_module=target,
                        target_layer=_layer_of(target),
                        lineno=getattr(node, "lineno", 1),
                    )
                )

    return records


def _violation(rec: ImportRecord) -> str | None:
    if rec.source_layer == "domain" and rec.target_root in DOMAIN_FORBIDDEN_LIBRARIES:
        return f"domain layer must not depend on {rec.target_root}"
    if rec.source_layer is None or rec.target_layer is None:
        return None
    return FORBIDDEN_IMPORTS.get((rec.source_layer, rec.target_layer))


def check_import_boundaries(root: str | Path = PACKAGE) -> list[str]:
    violations: list[str] = []
    for rec in collect_import_records(root):
        rule = _violation(rec)
        if rule:
            violations.append(
                f"{rec.source_file.as_posix()}:{rec.lineno} "
                f"{rec.source_module} -> {rec.target_module}: {rule}"
            )
    return sorted(set(violations))


def main() -> int:
    parser = argparse.ArgumentParser(description="Check venue_hours import boundaries")
    parser.add_argument("--root", default=PACKAGE, help="Package directory to scan")
    args = parser.parse_args()

    violations = check_import_boundaries(args.root)
    if violations:
        print("Import boundary violations:")
        for line in violations:
            print(f"- {line}")
        return 1

    print("Import boundary check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

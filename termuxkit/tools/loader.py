from __future__ import annotations

import importlib
import os
import shutil
import tomllib
from pathlib import Path

import structlog

from termuxkit.tools.registry import register_skill
from termuxkit.tools.skill import SkillManifest

log = structlog.get_logger()

_loaded = False

SKILLS_DIR = Path(__file__).parent / "skills"


def discover_and_load_skills() -> list[SkillManifest]:
    """Load every skills/<name>/skill.toml and import the Termux tool modules it lists.

    Only the first call scans the directory; later calls return the manifests
    already registered.
    """
    global _loaded
    if _loaded:
        from termuxkit.tools.registry import get_skill_manifests
        return get_skill_manifests()

    manifests: list[SkillManifest] = []

    if not SKILLS_DIR.is_dir():
        log.warning("skills.dir_missing", path=str(SKILLS_DIR))
        _loaded = True
        return manifests

    for skill_dir in sorted(SKILLS_DIR.iterdir()):
        if not skill_dir.is_dir():
            continue

        toml_path = skill_dir / "skill.toml"
        if not toml_path.exists():
            continue

        with open(toml_path, "rb") as f:
            data = tomllib.load(f)

        skill_data = data.get("skill", {})
        manifest = SkillManifest(
            name=skill_data["name"],
            display_name=skill_data["display_name"],
            description=skill_data["description"],
            tool_modules=skill_data.get("tool_modules", []),
            commands=skill_data.get("commands", []),
        )

        # tool modules register themselves on import
        for module_name in manifest.tool_modules:
            fqn = f"termuxkit.tools.skills.{skill_dir.name}.{module_name}"
            try:
                importlib.import_module(fqn)
                log.debug("skills.module_loaded", module=fqn)
            except Exception:
                log.exception("skills.module_failed", module=fqn)

        register_skill(manifest)
        manifests.append(manifest)
        log.debug("skills.loaded", skill=manifest.name, tools=manifest.tool_modules)

    _loaded = True
    log.info("skills.discovered", count=len(manifests))
    return manifests


def missing_commands(manifests: list[SkillManifest], bin_dir: str = "") -> dict[str, list[str]]:
    """Map skill name to the termux-* executables it needs that cannot be found."""
    missing: dict[str, list[str]] = {}
    for manifest in manifests:
        absent = [
            cmd for cmd in manifest.commands
            if shutil.which(os.path.join(bin_dir, cmd) if bin_dir else cmd) is None
        ]
        if absent:
            missing[manifest.name] = absent
    return missing

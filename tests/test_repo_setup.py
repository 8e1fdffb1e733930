# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the repo_setup feature.

Validates the project bootstrap:
  1. Entry point and core modules carry PEP 723 inline metadata
  2. mechanics/ package with one module per battle concern
  3. Pydantic models for fighters, launches and outcomes in models.py
  4. pyproject.toml declares the runtime and test dependencies
  5. battle.py runs end to end as a module
"""

import json
import subprocess
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


# ---------------------------------------------------------------------------
# Step 1: PEP 723 metadata
# ---------------------------------------------------------------------------

class TestStep1PEP723Metadata:
    """Runnable modules must have a PEP 723 inline metadata block."""

    @pytest.mark.parametrize("module", ["battle.py", "models.py", "simulation.py", "battle_output.py"])
    def test_module_has_pep723_block(self, module):
        text = (PROJECT_ROOT / module).read_text()
        assert text.startswith("# /// script")
        header = text.split("# ///", 2)[1]
        assert "pydantic" in header


# ---------------------------------------------------------------------------
# Step 2: mechanics/ package
# ---------------------------------------------------------------------------

class TestStep2MechanicsPackage:

    EXPECTED_MODULES = [
        "constants",
        "fighter_meta",
        "modifiers",
        "hit_chance",
        "finish",
        "scoring",
    ]

    def test_mechanics_init_exists(self):
        assert (PROJECT_ROOT / "mechanics" / "__init__.py").exists()

    @pytest.mark.parametrize("module", EXPECTED_MODULES)
    def test_module_file_exists(self, module):
        assert (PROJECT_ROOT / "mechanics" / f"{module}.py").exists()

    def test_public_api_importable(self):
        import mechanics
        for name in mechanics.__all__:
            assert callable(getattr(mechanics, name))


# ---------------------------------------------------------------------------
# Step 3: Pydantic models
# ---------------------------------------------------------------------------

class TestStep3PydanticModels:

    @pytest.mark.parametrize("name", [
        "CombatStats", "FighterMeta", "Fighter", "LaunchType",
        "FinishFlags", "BattleOutcome", "MatchResult",
    ])
    def test_model_is_pydantic(self, name):
        import models
        from pydantic import BaseModel
        assert issubclass(getattr(models, name), BaseModel)

    def test_launch_type_has_all_modifiers(self):
        from models import LaunchType
        fields = set(LaunchType.model_fields)
        required = {
            "attack_modifier", "defense_modifier", "stamina_modifier", "propulsion_modifier",
            "spin_modifier", "over_modifier", "burst_modifier", "xtreme_modifier",
            "selfko_modifier",
        }
        assert required.issubset(fields)

    def test_battle_outcome_serialization(self):
        from models import BattleOutcome, FinishFlags, Winner
        outcome = BattleOutcome(
            winner=Winner.SELF,
            self_result=FinishFlags(over=True),
            opponent_result=FinishFlags(),
            self_score=2,
            opponent_score=0,
        )
        data = json.loads(outcome.model_dump_json())
        assert data["winner"] == "self"
        assert data["self_result"]["over"] is True


# ---------------------------------------------------------------------------
# Step 4: packaging
# ---------------------------------------------------------------------------

class TestStep4Packaging:

    def test_pyproject_declares_dependencies(self):
        text = (PROJECT_ROOT / "pyproject.toml").read_text()
        assert "pydantic>=2.0" in text
        assert "pytest>=7.0" in text

    def test_sample_catalog_is_valid_json(self):
        data = json.loads((PROJECT_ROOT / "data" / "sample_catalog.json").read_text())
        assert data["fighters"]


# ---------------------------------------------------------------------------
# Step 5: end-to-end run
# ---------------------------------------------------------------------------

class TestStep5EndToEnd:

    def test_battle_runs_as_script(self):
        result = subprocess.run(
            [sys.executable, "battle.py", "--seed", "42", "--quiet"],
            cwd=PROJECT_ROOT, capture_output=True, text=True, timeout=60,
        )
        assert result.returncode == 0, result.stderr
        assert "Winner" in result.stdout or "No winner" in result.stdout

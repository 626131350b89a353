"""
tests/test_models.py
Unit tests for crudgen.models.ProjectLayout (defaults, normalisation, strictness).
"""

from __future__ import annotations

import pathlib

import pytest
from pydantic import ValidationError

from crudgen.models import ProjectLayout


class TestProjectLayout:
    def test_laravel_defaults(self, tmp_path: pathlib.Path) -> None:
        layout = ProjectLayout(root=tmp_path)
        assert layout.models_dir == "app/Models"
        assert layout.controllers_dir == "app/Http/Controllers/Api"
        assert layout.seeder_namespace == "Database\\Seeders"
        assert layout.bootstrap_command == ["php", "artisan", "install:api", "--no-interaction"]
        assert layout.path(layout.routes_file) == tmp_path / "routes/api.php"

    def test_every_field_accepted_by_its_own_name(self, tmp_path: pathlib.Path) -> None:
        defaults = ProjectLayout(root=tmp_path)
        data = {name: getattr(defaults, name) for name in ProjectLayout.model_fields}
        assert ProjectLayout.model_validate(data) == defaults

    def test_unknown_key_rejected(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(ValidationError):
            ProjectLayout(root=tmp_path, modelsDir="src")

    def test_assignment_is_validated_and_normalised(self, tmp_path: pathlib.Path) -> None:
        layout = ProjectLayout(root=tmp_path)
        layout.models_dir = "src\\Domain\\"
        layout.model_namespace = "\\Domain\\Entities\\"
        layout.extension = ".inc"
        assert layout.models_dir == "src/Domain"
        assert layout.model_namespace == "Domain\\Entities"
        assert layout.extension == "inc"
        with pytest.raises(ValidationError):
            layout.generate_resource = "maybe"

"""
Tests unitaires pour les commandes CLI.

Tests couvrant:
- import-csv : import reel sur base en memoire, dry-run, erreurs de fichier
- taxonomies : listing et filtre par categorie
- settings show / reset / load
- version
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from vitrine.main import app

runner = CliRunner()

HEADER = "Nom;Keywords;Budget;Feel;Style;Type de vidéo;Objectif"


@pytest.fixture
def cli_container(container):
    """Patche Container dans helpers.py : @with_container() l'instancie la."""
    with patch("vitrine.adapters.cli.helpers.Container", return_value=container):
        yield container


@pytest.fixture
def mock_container():
    with patch("vitrine.adapters.cli.helpers.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        yield container_instance


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalogue.csv"
    path.write_text(
        "\n".join(
            [
                HEADER,
                "Clip A;Drone;5000;Chaleureux;;Corpo;Recrutement",
                ";Drone;5000;;;Corpo;",
                "Clip C;;10 000 à 20 000;;;Story;",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path


class TestImportCsvCommand:
    """Tests pour la commande import-csv."""

    def test_import_writes_catalog(self, cli_container, catalog_file):
        result = runner.invoke(app, ["import-csv", str(catalog_file)])

        assert result.exit_code == 0, result.output
        assert "Termine : 2 lignes, 2 videos, 5 tags, 5 liens." in result.stdout

        videos = cli_container.video_repository().list_all()
        assert sorted(v.title for v in videos) == ["Clip A", "Clip C"]
        assert all(not v.is_public for v in videos)
        labels = {t.label for t in cli_container.taxonomy_repository().list_all()}
        assert labels == {"Drone", "Chaleureux", "Corpo", "Recrutement", "Story"}

    def test_dry_run_writes_nothing(self, cli_container, catalog_file):
        result = runner.invoke(app, ["import-csv", str(catalog_file), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry-run : 2 lignes analysees." in result.stdout
        assert cli_container.video_repository().list_all() == []
        assert cli_container.taxonomy_repository().list_all() == []

    def test_missing_file(self, cli_container, tmp_path):
        result = runner.invoke(app, ["import-csv", str(tmp_path / "absent.csv")])
        assert result.exit_code == 1
        assert "introuvable" in result.output

    def test_missing_columns(self, cli_container, tmp_path):
        path = tmp_path / "incomplet.csv"
        path.write_text("Nom;Budget\nClip;5000\n", encoding="utf-8")

        result = runner.invoke(app, ["import-csv", str(path)])

        assert result.exit_code == 1
        assert "Colonnes manquantes" in result.output
        assert cli_container.video_repository().list_all() == []

    def test_latin1_file(self, cli_container, tmp_path):
        path = tmp_path / "export-excel.csv"
        path.write_bytes(f"{HEADER}\nClip;;;;;Corpo;\n".encode("latin-1"))

        result = runner.invoke(app, ["import-csv", str(path)])

        assert result.exit_code == 1
        assert "UTF-8" in result.output
        assert "Traceback" not in result.output
        assert cli_container.video_repository().list_all() == []

    def test_missing_database_url(self, mock_container, catalog_file):
        mock_container.config.return_value = MagicMock(database_url="")

        result = runner.invoke(app, ["import-csv", str(catalog_file)])

        assert result.exit_code == 1
        mock_container.importer_service.assert_not_called()
        mock_container.database.init.assert_not_called()


class TestTaxonomiesCommand:
    def test_lists_taxonomies(self, cli_container, catalog_file):
        runner.invoke(app, ["import-csv", str(catalog_file)])

        result = runner.invoke(app, ["taxonomies", "--kind", "type"])

        assert result.exit_code == 0, result.output
        assert "Corpo" in result.stdout
        assert "Story" in result.stdout
        assert "Drone" not in result.stdout

    def test_unknown_kind(self, cli_container):
        result = runner.invoke(app, ["taxonomies", "-k", "genre"])
        assert result.exit_code == 1


class TestSettingsCommands:
    """Tests pour settings show, reset et load."""

    def test_show_defaults(self, cli_container):
        result = runner.invoke(app, ["settings", "show"])

        assert result.exit_code == 0, result.output
        document = json.loads(result.stdout)
        assert document["keywordLimit"] == 4
        assert "recrutement" in document["objectives"]

    def test_load_then_show(self, cli_container, tmp_path):
        path = tmp_path / "reglages.json"
        path.write_text(json.dumps({"keywordLimit": 2, "fallbackToBest": False}), encoding="utf-8")

        result = runner.invoke(app, ["settings", "load", str(path)])
        assert result.exit_code == 0, result.output

        settings = cli_container.settings_store().load()
        assert settings.keyword_limit == 2
        assert settings.fallback_to_best is False
        assert settings.version == 1

    def test_load_invalid_json(self, cli_container, tmp_path):
        path = tmp_path / "casse.json"
        path.write_text("{pas du json", encoding="utf-8")

        result = runner.invoke(app, ["settings", "load", str(path)])

        assert result.exit_code == 1
        assert not cli_container.config().settings_file.exists()

    def test_load_non_object(self, cli_container, tmp_path):
        path = tmp_path / "liste.json"
        path.write_text("[1, 2]", encoding="utf-8")
        result = runner.invoke(app, ["settings", "load", str(path)])
        assert result.exit_code == 1

    def test_reset(self, cli_container):
        result = runner.invoke(app, ["settings", "reset"])
        assert result.exit_code == 0, result.output
        assert "version 1" in result.stdout

    def test_reset_replaces_corrupt_file(self, cli_container):
        settings_file = cli_container.config().settings_file
        settings_file.write_text("{tronque", encoding="utf-8")

        result = runner.invoke(app, ["settings", "reset"])

        assert result.exit_code == 0, result.output
        assert json.loads(settings_file.read_text(encoding="utf-8"))["version"] == 1

    def test_load_non_finite_number(self, cli_container, tmp_path):
        path = tmp_path / "nan.json"
        path.write_text('{"keywordLimit": NaN}', encoding="utf-8")

        result = runner.invoke(app, ["settings", "load", str(path)])

        assert result.exit_code == 1
        assert not cli_container.config().settings_file.exists()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Vitrine v0.1.0" in result.stdout

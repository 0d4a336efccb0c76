import json
import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from webapp_manifest.models.config import ValidatorConfig
from webapp_manifest.models.errors import InvalidManifestError
from webapp_manifest.services.config_loader import load_validator_config
from webapp_manifest.services.schema_loader import DEFAULT_SCHEMA_PATH
from webapp_manifest.services.validator import ManifestValidator


class AliasedGroup(click.Group):
    _aliases = {"v": "validate", "s": "schema"}

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self._aliases.get(cmd_name, cmd_name))


@click.group(cls=AliasedGroup)
def cli():
    """Web App Manifest Validator."""
    pass


@cli.command("validate")
@click.option("--input", "-i", "input_file", required=True, type=click.Path(exists=True, path_type=Path), help="Manifest JSON file to validate")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, path_type=Path), help="Path to YAML validator config file")
@click.option("--listed", is_flag=True, default=False, help="App is listed in the marketplace")
@click.option("--packaged/--hosted", default=True, help="App is packaged (default) or hosted")
@click.option("--app-type", "app_type", default=None, help="Override appType ('' disables marketplace rules)")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the error report as JSON")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def validate(input_file, config, listed, packaged, app_type, as_json, verbose):
    """Validate a web app manifest and report every violation."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    validator = _build_validator(config)
    context = {"listed": listed, "packaged": packaged}
    if app_type is not None:
        context["appType"] = app_type

    content = Path(input_file).read_bytes()
    try:
        result = validator.validate(content, context)
    except InvalidManifestError as e:
        raise click.ClickException(f"{input_file}: {e}")

    if as_json:
        click.echo(json.dumps(result.messages(), indent=2, ensure_ascii=False))

    if not result.is_valid:
        click.echo(f"Validation FAILED: {input_file}", err=True)
        for code, message in result.messages().items():
            click.echo(f"  - {code}: {message}", err=True)
        raise click.ClickException(f"Manifest has {len(result.errors)} error(s)")

    click.echo(f"Manifest is valid: {input_file}")


@cli.command("schema")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, path_type=Path), help="Path to YAML validator config file")
def schema(config):
    """Print the effective manifest schema as JSON."""
    validator = _build_validator(config)
    dumped = {
        name: spec.model_dump(mode="json", by_alias=True, exclude_none=True)
        for name, spec in validator.schema.items()
    }
    click.echo(json.dumps(dumped, indent=2, ensure_ascii=False))


def _build_validator(config_path: Path | None) -> ManifestValidator:
    config = _load_config(config_path) if config_path else ValidatorConfig()
    schema_path = config.schema_path or DEFAULT_SCHEMA_PATH
    try:
        return ManifestValidator(config)
    except OSError as e:
        raise click.ClickException(f"Cannot read schema {schema_path}: {e}")
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in schema {schema_path}: {e}")
    except ValidationError as e:
        raise click.ClickException(f"Schema error in {schema_path}: {_format_errors(e)}")
    except ValueError as e:
        raise click.ClickException(f"Schema error in {schema_path}: {e}")


def _load_config(config_path: Path) -> ValidatorConfig:
    try:
        return load_validator_config(config_path)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in config file {config_path}: {e}")
    except ValidationError as e:
        raise click.ClickException(f"Config validation error in {config_path}: {_format_errors(e)}")


def _format_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )

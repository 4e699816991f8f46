"""Inspect and scaffold the migration configuration file."""

from dataclasses import fields
from pathlib import Path

import click
import tomlkit

from eos_upgrade.cli.ensure import Ensure, error_boundary
from eos_upgrade.cli.output import machine_output, user_output
from eos_upgrade.core.configuration import (
    DEFAULT_CONFIG_PATH,
    Configuration,
    SecondaryStorage,
    configuration_items,
)
from eos_upgrade.core.context import UpgradeContext, create_context


def _toml_value(value: object) -> object:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, tuple):
        array = tomlkit.array()
        for item in value:
            array.append(str(item))
        array.multiline(True)
        return array
    return value


def render_config_template(config: Configuration) -> str:
    """Render a TOML file spelling out every configuration value.

    Tables come last, as TOML requires. Loading the result with
    load_configuration gives back an identical Configuration.
    """
    doc = tomlkit.document()
    doc.add(tomlkit.comment("eos-upgrade configuration"))
    doc.add(tomlkit.comment("Every key is optional; omitted keys keep their built-in default."))
    doc.add(tomlkit.nl())

    for f in fields(Configuration):
        value = getattr(config, f.name)
        if isinstance(value, (dict, SecondaryStorage)):
            continue
        doc[f.name] = _toml_value(value)

    products = tomlkit.table()
    products.comment("machine architecture -> OS product")
    for arch, product in config.arch_to_product.items():
        products[arch] = product
    doc["arch_to_product"] = products

    storage = tomlkit.table()
    storage.comment("present when label_path exists")
    for f in fields(SecondaryStorage):
        storage[f.name] = _toml_value(getattr(config.secondary_storage, f.name))
    doc["secondary_storage"] = storage

    return tomlkit.dumps(doc)


@click.group("config")
def config_group() -> None:
    """Show or create the migration configuration."""


@config_group.command("show")
@click.pass_context
def config_show(click_ctx: click.Context) -> None:
    """Print the effective configuration as key=value lines."""
    if click_ctx.obj is None:
        with error_boundary(mid_run=False):
            click_ctx.obj = create_context()
    ctx: UpgradeContext = click_ctx.obj

    for key, value in configuration_items(ctx.config):
        machine_output(f"{key}={value}")


@config_group.command("init")
@click.argument("path", type=click.Path(path_type=Path), default=DEFAULT_CONFIG_PATH)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def config_init(path: Path, force: bool) -> None:
    """Write a configuration file with every default spelled out."""
    Ensure.invariant(
        force or not path.exists(), f"{path} already exists. Use --force to replace it."
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_config_template(Configuration()), encoding="utf-8")
    user_output(f"✓ Wrote {click.style(str(path), fg='green')}")

"""
Command Line Interface for tagmap.
"""
import json
import click
from ..exceptions import TagMapError
from ..CONFIG.task_inputs import TaskInputs
from ..MODELS.tagging_config import TaggingConfig
from ..REGISTRY.registry_connection import RegistryConnection
from ..SOURCE.source_tags import GitSourceTagProvider, StaticSourceTagProvider
from ..BUILDERS.image_mapper import build_mappings, load_image_names
from ..CONVERTERS.to_script import TagScriptConverter


@click.group()
@click.option('--env-file', '-e', default=None, type=click.Path(dir_okay=False),
              help='.env file with INPUT_* task inputs')
@click.option('--config', '-c', 'config_file', default=None, type=click.Path(dir_okay=False),
              help='YAML tagging configuration (overrides INPUT_* variables)')
@click.option('--registry', '-r', default=None, help='Registry used to qualify image names')
@click.option('--verbose', '-v', is_flag=True, help='Print the resolved configuration')
@click.pass_context
def cli(ctx, env_file, config_file, registry, verbose):
    """
    tagmap - compute the image tags a push step has to apply.

    Reads image names and tagging policy, then lists every
    source image -> target image pair in order.
    """
    ctx.ensure_object(dict)
    ctx.obj['env_file'] = env_file
    ctx.obj['config_file'] = config_file
    ctx.obj['registry'] = registry
    ctx.obj['verbose'] = verbose


def _resolve(ctx):
    """
    Resolves task inputs, tagging configuration and registry connection.
    """
    env_file = ctx.obj.get('env_file')
    try:
        inputs = TaskInputs.from_env_file(env_file) if env_file else TaskInputs()
        if ctx.obj.get('config_file'):
            config = TaggingConfig.from_yaml(ctx.obj['config_file'])
        else:
            config = TaggingConfig.from_inputs(inputs)
    except (TagMapError, OSError, UnicodeDecodeError) as e:
        raise click.ClickException(str(e))

    registry = ctx.obj.get('registry')
    connection = RegistryConnection(registry) if registry else RegistryConnection.from_inputs(inputs)

    if ctx.obj.get('verbose'):
        click.echo(f"Image names file: {config.image_names_path}", err=True)
        click.echo(f"Registry: {connection}", err=True)
        click.echo(f"Qualify image names: {config.qualify_image_name}", err=True)
        click.echo(f"Additional tags: {', '.join(config.additional_image_tags) or '-'}", err=True)
        click.echo(f"Include source tags: {config.include_source_tags}", err=True)
        click.echo(f"Include latest tag: {config.include_latest_tag}", err=True)

    return inputs, config, connection


def _mappings(ctx):
    inputs, config, connection = _resolve(ctx)
    try:
        image_names = load_image_names(config)
        if config.source_tags is not None:
            source_tags = StaticSourceTagProvider(config.source_tags)
        else:
            source_tags = GitSourceTagProvider(inputs)
        return build_mappings(connection, image_names, config, source_tags=source_tags)
    except (TagMapError, OSError, UnicodeDecodeError) as e:
        raise click.ClickException(str(e))


@cli.command()
@click.pass_context
def names(ctx):
    """List the source image names."""
    _, config, _ = _resolve(ctx)
    try:
        image_names = load_image_names(config)
    except (TagMapError, OSError, UnicodeDecodeError) as e:
        raise click.ClickException(str(e))
    for name in image_names:
        click.echo(name)


@cli.command(name='map')
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'json']), default='text')
@click.pass_context
def map_images(ctx, output_format):
    """List source to target image mappings"""
    mappings = _mappings(ctx)
    if output_format == 'json':
        click.echo(json.dumps([m.to_dict() for m in mappings], indent=2))
        return

    for m in mappings:
        click.echo(f"{m.source_image_name} -> {m.target_image_name}")


@cli.command()
@click.option('--out', '-o', default='tag_images.sh', help='Output script path')
@click.option('--push', is_flag=True, help='Also push the target images')
@click.pass_context
def script(ctx, out, push):
    """Write a docker tag script"""
    mappings = _mappings(ctx)
    converter = TagScriptConverter(mappings, push=push)
    path = converter.convert(out)
    click.echo(f"Tag script with {len(mappings)} operation(s) generated in {path}")


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()

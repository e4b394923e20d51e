import json
import logging
from pathlib import Path

import click
import jinja2

from .config import MergeConfig, OutputMode
from .errors import CodeMergeError
from .merger import AtomicWriter, SnippetMerger
from .templates import SnippetTemplates

logger = logging.getLogger(__name__)


def read_generated(path: Path, context_path) -> str:
    """Generated code from a plain source file or a .jinja2 template."""
    if path.suffix != ".jinja2":
        return path.read_text(encoding="utf-8")

    context = {}
    if context_path is not None:
        with open(context_path, encoding="utf-8") as f:
            context = json.load(f)
    return SnippetTemplates(path.parent).render(path.name, context)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--history",
    "-H",
    multiple=True,
    type=click.Path(exists=True, resolve_path=True),
    help="Previously generated version of the snippet, oldest first (repeatable)",
)
@click.option(
    "--context",
    default=None,
    type=click.Path(exists=True, resolve_path=True),
    help="JSON file with variables for a .jinja2 GENERATED template",
)
@click.option("--mode", "-m", default=None, type=click.Choice([m.value for m in OutputMode]))
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Write here instead of TARGET")
@click.option("--dry-run", is_flag=True, default=False, help="Print the result instead of writing it")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("generated", type=click.Path(exists=True, resolve_path=True))
@click.argument("target", type=click.Path(resolve_path=True))
def snippet_merge(config, history, context, mode, output, dry_run, verbose, generated, target):
    """Merge GENERATED code into TARGET, preserving manual edits."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = MergeConfig.from_dict(json.load(f))
    else:
        config = MergeConfig()

    # CLI flag overrides the config file
    if mode is not None:
        config.output.mode = OutputMode(mode)

    target_path = Path(target)
    output_path = Path(output) if output is not None else target_path
    merger = SnippetMerger(config)
    report = None

    try:
        refuse_existing = config.output.mode is OutputMode.ERROR_IF_EXISTS
        if refuse_existing and output_path.exists():
            raise FileExistsError(f"Output file already exists: {output_path}. Use --mode force to overwrite or --mode merge to preserve manual edits.")

        generated_code = read_generated(Path(generated), context)

        if target_path.exists() and config.output.mode is OutputMode.MERGE:
            history_codes = [Path(p).read_text(encoding="utf-8") for p in history]
            result = merger.merge_files(generated_code, target_path.read_text(encoding="utf-8"), history_codes)
            code = result.code
            report = result.report
        else:
            code = generated_code

        writer = AtomicWriter(dialect=config.dialect)
        if dry_run:
            click.echo(code, nl=False)
        elif refuse_existing:
            writer.write_if_not_exists(output_path, code, validate=config.output.validate_before_write)
        elif config.output.atomic_write:
            writer.write(output_path, code, validate=config.output.validate_before_write)
        else:
            if config.output.validate_before_write:
                merger.validate(code)
            output_path.write_text(code, encoding="utf-8")

    except (CodeMergeError, FileExistsError, jinja2.TemplateError) as e:
        raise click.ClickException(str(e)) from e

    if report is not None:
        for conflict in report.conflicts:
            click.echo(f"Preserved manual edit of '{conflict.name}' as a comment", err=True)
        logger.info("%s: %s", output_path.name, report.summary())

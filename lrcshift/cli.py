from __future__ import annotations

import logging
from pathlib import Path

import typer

from lrcshift.audio.metadata import read_audio_lyrics, write_audio_lyrics
from lrcshift.config import AppConfig, load_config, save_config_defaults
from lrcshift.errors import LrcFileNotFound, LrcshiftError
from lrcshift.files import atomic_write_lines, read_lrc_lines, read_stdin_lines
from lrcshift.logging_setup import setup_logging
from lrcshift.lrc.process import OFFSET_KEYS, build_options, process_lyrics
from lrcshift.lrc.tags import TimedTag, read_tags

logger = logging.getLogger(__name__)

IN_PLACE = ":in:"

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _emit(lines: list[str]) -> None:
    typer.echo("\n".join(lines))


def _fix_lrc(
    cfg: AppConfig,
    file: str,
    save_as: str,
    options: str,
) -> None:
    if file == "-":
        lines = read_stdin_lines(typer.get_text_stream("stdin"))
    else:
        lines = read_lrc_lines(Path(file))

    out = process_lyrics(lines, options)
    if not out:
        logger.warning("Input had no lyrics.")

    if not save_as or save_as == "-":
        _emit(out)
    else:
        atomic_write_lines(Path(save_as), out, temp_dir=cfg.temp_dir)


def _fix_audio(
    cfg: AppConfig,
    audio_file: Path,
    save_as: str,
    options: str,
    link_lrc: Path | None,
) -> None:
    dest = Path(save_as) if save_as and save_as != "-" else None
    if dest is not None and dest.suffix.lower() not in (audio_file.suffix.lower(), ".lrc"):
        raise LrcshiftError(
            "Source and destination extension must be the same, except for exporting an .lrc file."
        )

    if link_lrc is not None:
        source_lines = read_lrc_lines(link_lrc)
    else:
        source_lines = read_audio_lyrics(audio_file, field=cfg.lyrics_field)

    out = process_lyrics(source_lines, options)
    if not out:
        logger.warning("Input audio file had no lyrics metadata.")

    if dest is None:
        _emit(out)
    elif dest.suffix.lower() == ".lrc":
        atomic_write_lines(dest, out, temp_dir=cfg.temp_dir)
    else:
        write_audio_lyrics(audio_file, dest, out, field=cfg.lyrics_field, temp_dir=cfg.temp_dir)


@app.command()
def fix(
    file: str = typer.Argument(..., help="Input .lrc or audio file, - to read .lrc from stdin"),
    link_lrc: Path | None = typer.Option(
        None, "--link-lrc", "-l", help="Embed this .lrc into the audio file instead of its own lyrics"
    ),
    save_as: str = typer.Option(
        "", "--save-as", "-s", help=f"Output path (empty: stdout, {IN_PLACE}: overwrite the input)"
    ),
    offset: int | None = typer.Option(None, "--offset", "-o", help="Override the file offset, in ms"),
    invert: bool = typer.Option(False, "--invert", "-i", help="Invert the offset sign"),
    drop_metadata: bool = typer.Option(False, "--drop-metadata", "-d", help="Drop ti/ar/al/... tags"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Correct LRC timestamps by their [offset:] tag (or --offset).

    Audio files are read and written through their embedded lyrics; metadata
    tags are always dropped for them.
    """
    cfg = load_config()
    setup_logging(debug)

    invert = invert or cfg.invert_offset
    drop_metadata = drop_metadata or cfg.drop_metadata

    if save_as == IN_PLACE:
        save_as = file

    if offset is not None and offset == 0:
        logger.warning('--offset 0 means "use file offset"; file offset will be used.')

    is_stdin = file == "-"
    treat_as_audio = not is_stdin and Path(file).suffix.lower() != ".lrc"

    try:
        if not is_stdin and not Path(file).exists():
            raise LrcFileNotFound(f'File "{file}" does not exist.')

        if treat_as_audio:
            options = build_options(offset or 0, invert, drop_metadata=True)
            logger.debug("Processing audio lyrics with options '%s'", options)
            _fix_audio(cfg, Path(file), save_as, options, link_lrc)
        else:
            if link_lrc is not None:
                logger.warning("Both inputs are .lrc files, ignoring --link-lrc")
            options = build_options(offset or 0, invert, drop_metadata)
            logger.debug("Processing lyrics with options '%s'", options)
            _fix_lrc(cfg, file, save_as, options)
    except LrcshiftError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def tags(lrc_path: Path):
    """Print the tags found on each line, then a summary."""
    try:
        lines = read_lrc_lines(lrc_path)
    except LrcshiftError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    timed = named = offsets = 0
    for n, line in enumerate(lines, start=1):
        for tag in read_tags(line):
            typer.echo(f"{n}\t{tag.name}\t{tag.value}")
            if isinstance(tag, TimedTag):
                timed += 1
            else:
                named += 1
                if tag.name in OFFSET_KEYS:
                    offsets += 1

    typer.echo(f"lines_total={len(lines)}")
    typer.echo(f"timestamps={timed}")
    typer.echo(f"named_tags={named}")
    typer.echo(f"offset_tags={offsets}")


@app.command("config")
def config_cmd(
    invert: bool | None = typer.Option(None, "--invert/--no-invert", help="Invert offsets by default"),
    drop_metadata: bool | None = typer.Option(
        None, "--drop-metadata/--keep-metadata", help="Drop metadata tags by default"
    ),
):
    """Show or change the defaults stored in config.json."""
    values: dict[str, bool] = {}
    if invert is not None:
        values["invert_offset"] = invert
    if drop_metadata is not None:
        values["drop_metadata"] = drop_metadata
    if values:
        save_config_defaults(**values)

    cfg = load_config()
    typer.echo(f"config_dir={cfg.config_dir}")
    typer.echo(f"invert_offset={cfg.invert_offset}")
    typer.echo(f"drop_metadata={cfg.drop_metadata}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

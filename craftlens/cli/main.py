"""Main CLI entry point for CraftLens."""

import click
import logging
import sys
from typing import List

from .. import __version__
from ..config import OUTPUT_FORMATS, load_settings
from ..core.templates import TEMPLATES
from ..editor.beat_detector import BeatSheetAnalysis, rounded_percent
from ..editor.engine import ANALYZERS, run_all, run_analysis
from ..editor.motif_tracker import MotifAnalysis
from ..editor.pov_checker import POVAnalysis
from ..editor.readability import ReadabilityMetrics
from ..io.file_handler import FileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
RULE = "=" * 50


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', type=click.Path(), help='Path to a craftlens.yaml settings file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """CraftLens - craft analysis for fiction manuscripts"""
    ctx.ensure_object(dict)
    try:
        settings = load_settings(config_path)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"❌ Error loading settings: {e}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format=LOG_FORMAT,
    )
    ctx.obj['settings'] = settings
    ctx.obj['file_handler'] = FileHandler()


def output_options(func):
    """Shared --format/--output options for analysis commands."""
    func = click.option('--output', 'output_file', type=click.Path(),
                        help='Write the result to a file instead of stdout')(func)
    func = click.option('--format', 'output_format', type=click.Choice(OUTPUT_FORMATS),
                        help='Output format (defaults to the configured format)')(func)
    return func


def _emit(ctx, data, text_lines: List[str], output_format, output_file) -> None:
    """Print or save a result in the requested format."""
    file_handler = ctx.obj['file_handler']
    output_format = output_format or ctx.obj['settings'].output_format

    if output_format == 'text':
        content = "\n".join(text_lines)
    else:
        content = file_handler.dumps(data, output_format)

    if output_file:
        file_handler.write_file(output_file, content)
        click.echo(f"✅ Wrote {output_format} result to {output_file}")
    else:
        click.echo(content)


def _recommendation_lines(recommendations: List[str]) -> List[str]:
    if not recommendations:
        return []
    return ["", "💡 Recommendations:"] + [f"  • {item}" for item in recommendations]


def render_readability(metrics: ReadabilityMetrics) -> List[str]:
    lines = [
        "📊 Readability Metrics",
        RULE,
        f"📝 Total words: {metrics.total_words:,}",
        f"⏱️  Reading time: {metrics.reading_time}",
        f"📖 Flesch Reading Ease: {metrics.flesch_reading_ease} ({metrics.reading_level})",
        f"🎓 Flesch-Kincaid Grade: {metrics.flesch_kincaid_grade}",
        f"🌫️  Gunning Fog Index: {metrics.gunning_fog_index}",
        f"🔢 SMOG Index: {metrics.smog_index}",
        "",
        "📈 Detailed Statistics:",
        f"  Sentences: {metrics.total_sentences}",
        f"  Syllables: {metrics.total_syllables}",
        f"  Words per sentence: {metrics.average_words_per_sentence}",
        f"  Syllables per word: {metrics.average_syllables_per_word}",
        f"  Complex words: {metrics.complex_words} ({metrics.percent_complex_words}%)",
    ]
    return lines + _recommendation_lines(metrics.recommendations)


def render_beats(analysis: BeatSheetAnalysis) -> List[str]:
    template = TEMPLATES[analysis.structure]
    lines = [
        f"📖 Beat Sheet ({template.name})",
        RULE,
        f"📝 Total words: {analysis.total_words:,}",
        f"🎬 Beats found: {len(analysis.beats)} of {len(template)}",
    ]
    for beat in analysis.beats:
        lines.append(
            f"  • {beat.name}: expected ~{beat.expected_position:g}%, "
            f"found at {rounded_percent(beat.actual_position)}% "
            f"(word {beat.location}, confidence {rounded_percent(beat.confidence)}%)"
        )
    pacing = analysis.pacing
    lines += [
        "",
        "⏳ Pacing:",
        f"  Act 1: {pacing['act1']:,} words",
        f"  Act 2: {pacing['act2']:,} words",
        f"  Act 3: {pacing['act3']:,} words",
    ]
    return lines + _recommendation_lines(analysis.recommendations)


def render_pov(analysis: POVAnalysis) -> List[str]:
    lines = [
        "👁️  POV Analysis",
        RULE,
        f"🧭 Dominant POV: {analysis.dominant_pov}",
        f"✅ Consistency score: {analysis.pov_consistency}/100",
        f"⚠️  Issues: {len(analysis.issues)}",
    ]
    for issue in analysis.issues:
        lines.append(f"  • [{issue.severity.value}] paragraph {issue.location + 1}: {issue.description}")
    if analysis.character_perspectives:
        lines += ["", "👥 Character perspectives:"]
        lines += [f"  • {name}: {count}" for name, count in analysis.character_perspectives.items()]
    return lines + _recommendation_lines(analysis.recommendations)


def render_motifs(analysis: MotifAnalysis) -> List[str]:
    lines = [
        "🔮 Motifs & Symbols",
        RULE,
        f"📚 Chapters detected: {analysis.chapter_count}",
        f"🔁 Motifs found: {len(analysis.motifs)}",
    ]
    for motif in analysis.motifs:
        chapters = sorted({occurrence.chapter for occurrence in motif.occurrences})
        lines.append(
            f"  • {motif.pattern} [{motif.category}] x{len(motif.occurrences)}: {motif.significance} "
            f"(chapters {', '.join(str(c) for c in chapters)})"
        )
    if analysis.recurring_phrases:
        lines += ["", "💬 Recurring phrases:"]
        lines += [f"  • \"{p.phrase}\" x{p.count}" for p in analysis.recurring_phrases]
    return lines


RENDERERS = {
    "readability": render_readability,
    "beats": render_beats,
    "pov": render_pov,
    "motifs": render_motifs,
}


def _analyze_command(ctx, name, manuscript_file, output_format, output_file, **options):
    text = ctx.obj['file_handler'].read_file(manuscript_file)
    result = run_analysis(name, text, **options)
    _emit(ctx, result.to_dict(), RENDERERS[name](result), output_format, output_file)


@cli.command()
@click.argument('manuscript_file', type=click.Path(exists=True))
@output_options
@click.pass_context
def readability(ctx, manuscript_file, output_format, output_file):
    """Score readability (Flesch, Fog, SMOG)"""
    try:
        _analyze_command(ctx, "readability", manuscript_file, output_format, output_file)
    except Exception as e:
        click.echo(f"❌ Error analyzing readability: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('manuscript_file', type=click.Path(exists=True))
@click.option('--template', 'template_key', type=click.Choice(list(TEMPLATES)),
              help='Story structure template (defaults to the configured template)')
@output_options
@click.pass_context
def beats(ctx, manuscript_file, template_key, output_format, output_file):
    """Detect story beats against a structure template"""
    try:
        template_key = template_key or ctx.obj['settings'].default_template
        _analyze_command(ctx, "beats", manuscript_file, output_format, output_file,
                         structure_template=template_key)
    except Exception as e:
        click.echo(f"❌ Error detecting beats: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('manuscript_file', type=click.Path(exists=True))
@output_options
@click.pass_context
def pov(ctx, manuscript_file, output_format, output_file):
    """Check point-of-view consistency"""
    try:
        _analyze_command(ctx, "pov", manuscript_file, output_format, output_file)
    except Exception as e:
        click.echo(f"❌ Error checking POV: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('manuscript_file', type=click.Path(exists=True))
@output_options
@click.pass_context
def motifs(ctx, manuscript_file, output_format, output_file):
    """Track motifs, symbols and recurring phrases"""
    try:
        _analyze_command(ctx, "motifs", manuscript_file, output_format, output_file)
    except Exception as e:
        click.echo(f"❌ Error tracking motifs: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('manuscript_file', type=click.Path(exists=True))
@click.option('--template', 'template_key', type=click.Choice(list(TEMPLATES)),
              help='Story structure template for the beat sheet')
@output_options
@click.pass_context
def report(ctx, manuscript_file, template_key, output_format, output_file):
    """Run every analyzer on a manuscript"""
    try:
        text = ctx.obj['file_handler'].read_file(manuscript_file)
        template_key = template_key or ctx.obj['settings'].default_template
        results = run_all(text, structure_template=template_key)

        lines: List[str] = []
        for name, result in results.items():
            if lines:
                lines.append("")
            lines += RENDERERS[name](result)

        data = {name: result.to_dict() for name, result in results.items()}
        _emit(ctx, data, lines, output_format, output_file)
    except Exception as e:
        click.echo(f"❌ Error building report: {e}", err=True)
        sys.exit(1)


@cli.command()
def templates():
    """List built-in story structure templates"""
    for template in TEMPLATES.values():
        click.echo(f"\n📐 {template.name} ({template.key})")
        for beat in template.beats:
            click.echo(f"  {beat.expected_position_percent:>3g}%  {beat.name}: {beat.description}")


@cli.command()
def analyzers():
    """List available analyzers"""
    for name, analyzer in ANALYZERS.items():
        click.echo(f"  • {name}: {analyzer.__doc__.strip()}")


def main():
    """Main entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()

"""CLI entry point for FlowScroll."""

import json
import logging
import sys

import click

from flowscroll.config.settings import Settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log engine decisions to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """FlowScroll: an adaptive feed of short cognitive micro-tasks."""
    settings = Settings.load()
    logging.basicConfig(
        level="INFO" if verbose else settings.log_level.upper(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _selector(settings: Settings, seed):
    import random

    from flowscroll.engine.lexicon import load_lexicon
    from flowscroll.engine.selector import TaskSelector

    return TaskSelector(load_lexicon(settings.lexicon_path), rng=random.Random(seed))


@main.command("next")
@click.option("--count", "-n", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--seed", type=int, default=None, help="Seed for reproducible draws")
@click.pass_context
def next_(ctx: click.Context, count: int, seed) -> None:
    """Generate tasks for the stored profile and print them as JSON."""
    from flowscroll.state.store import ProfileStore

    settings = ctx.obj["settings"]
    profile = ProfileStore(settings.db_path).load(settings.storage_key)
    selector = _selector(settings, seed)
    for _ in range(count):
        task = selector.select_and_generate(profile)
        click.echo(json.dumps(task.to_dict(), ensure_ascii=False))


@main.command()
@click.pass_context
def profile(ctx: click.Context) -> None:
    """Show per-type levels, confidence and streaks."""
    from flowscroll.engine.task_types import TaskType
    from flowscroll.state.store import ProfileStore

    settings = ctx.obj["settings"]
    stored = ProfileStore(settings.db_path).load(settings.storage_key)
    click.echo(f"User {stored.user_id}: {len(stored.history)} results, {stored.total_time_ms} ms total")
    for task_type in TaskType:
        streak = stored.streaks.get(task_type)
        streak_text = f"+{streak.correct}/-{streak.wrong}" if streak else "-"
        confidence = stored.confidence.get(task_type)
        confidence_text = f"{confidence:.2f}" if confidence is not None else "-"
        click.echo(
            f"  {task_type.value:<24} level {stored.level_for(task_type):<6} "
            f"confidence {confidence_text:<5} streak {streak_text}"
        )


@main.command()
@click.confirmation_option(prompt="Discard the stored profile?")
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Discard the stored profile."""
    from flowscroll.state.store import ProfileStore

    settings = ctx.obj["settings"]
    ProfileStore(settings.db_path).reset(settings.storage_key)
    click.echo("Profile reset.")


@main.command()
@click.option("--tasks", "num_tasks", default=50, show_default=True, type=click.IntRange(min=1))
@click.option("--accuracy", default=0.8, show_default=True, type=click.FloatRange(0.0, 1.0))
@click.option("--time-ms", default=4000, show_default=True, type=click.IntRange(min=0))
@click.option("--type", "type_name", default=None, help="Restrict to one task type, e.g. MATH_ADDITION")
@click.option("--seed", type=int, default=None)
@click.pass_context
def simulate(ctx: click.Context, num_tasks: int, accuracy: float, time_ms: int, type_name, seed) -> None:
    """Drive a synthetic player through the adapter without saving anything."""
    from flowscroll.engine.adaptive import adapt
    from flowscroll.engine.evaluator import SessionContext, evaluate
    from flowscroll.engine.profile import UserProfile
    from flowscroll.engine.task_types import SELECTABLE_TYPES, TaskType

    task_type = None
    if type_name is not None:
        task_type = TaskType.parse(type_name.upper())
        selectable = [t for types in SELECTABLE_TYPES.values() for t in types]
        if task_type not in selectable:
            raise click.BadParameter(f"not a selectable task type: {type_name}", param_hint="--type")

    settings = ctx.obj["settings"]
    selector = _selector(settings, seed)
    session = SessionContext(started_at=0)
    current = UserProfile()
    clock = 0

    for i in range(1, num_tasks + 1):
        if task_type is None:
            task = selector.select_and_generate(current, now=clock)
        else:
            task = selector.build_task(task_type, current, now=clock)
        clock += time_ms
        success = selector.rng.random() < accuracy
        outcome = evaluate(task, success, time_ms, False, session, now=clock)
        result = adapt(current, outcome)
        current = result.profile
        click.echo(
            f"{i:>4} {task.type.value:<24} {outcome.outcome.value:<8} "
            f"{task.difficulty_level} -> {current.level_for(task.type)} "
            f"{result.decision.value} ({result.trend})"
        )

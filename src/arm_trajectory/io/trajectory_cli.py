"""Define a command-line interface for running trajectory goals on a simulated arm."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click
from rich.table import Table

from arm_trajectory.io.logging import console
from arm_trajectory.io.yaml_utils import export_yaml_data
from arm_trajectory.robots import GripperAngleLimits, SimulatedArmController
from arm_trajectory.spatial import StaticFrameTransformer
from arm_trajectory.trajectories import (
    TrajectoryExecutor,
    TrajectoryExecutorConfig,
    TrajectoryFeedback,
    TrajectoryResult,
    load_frames,
    load_goal,
)

SIMULATED_FINGER_LIMITS = GripperAngleLimits(open_rad=0.0, closed_rad=1.2)
"""Finger joint limits (radians) of the simulated gripper."""

OUTCOME_COLORS = {"SUCCEEDED": "green", "PREEMPTED": "yellow", "ABORTED": "red"}
"""Colors used to display each execution outcome."""


def _render_feedback_table(feedback: list[TrajectoryFeedback], frame: str) -> Table:
    """Render a table listing the arm pose published at each poll tick."""
    table = Table(title=f"Feedback ({frame})", show_lines=False)
    table.add_column("Tick", justify="right", style="cyan", no_wrap=True)
    table.add_column("x, y, z (m)", style="bold")
    table.add_column("roll, pitch, yaw (rad)", style="magenta")

    for fb in feedback:
        x, y, z, roll, pitch, yaw = fb.pose.to_xyz_rpy()
        table.add_row(
            str(fb.tick),
            f"{x:.3f}, {y:.3f}, {z:.3f}",
            f"{roll:.3f}, {pitch:.3f}, {yaw:.3f}",
        )
    return table


def result_to_dict(result: TrajectoryResult) -> dict[str, object]:
    """Convert a trajectory result into a dictionary that can be exported to YAML."""
    return {
        "outcome": result.outcome.name,
        "failure": None if result.failure is None else result.failure.name,
        "message": result.message,
        "waypoints_sent": result.waypoints_sent,
        "ticks": result.ticks,
        "pose": None
        if result.pose is None
        else {"xyz_rpy": list(result.pose.to_xyz_rpy()), "frame": result.pose.ref_frame},
    }


@click.group()
def cli() -> None:
    """Run arm trajectory goals from the command line."""


@cli.command()
@click.argument("goal_yaml", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_yaml",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file configuring the trajectory executor.",
)
@click.option("--loop-hz", type=click.FloatRange(min=0, min_open=True), help="Override the poll frequency (Hz).")
@click.option(
    "--motion-s",
    type=click.FloatRange(min=0),
    default=0.05,
    show_default=True,
    help="Simulated duration of each motion (s).",
)
@click.option("--fault-after", type=click.IntRange(min=1), help="Fault the arm after N completed motions.")
@click.option(
    "--output",
    "output_yaml",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Export the result to this YAML file.",
)
def run(
    goal_yaml: Path,
    config_yaml: Path | None,
    loop_hz: float | None,
    motion_s: float,
    fault_after: int | None,
    output_yaml: Path | None,
) -> None:
    """Execute the goal in GOAL_YAML on a simulated arm and report its outcome."""
    config = TrajectoryExecutorConfig() if config_yaml is None else TrajectoryExecutorConfig.from_yaml(config_yaml)
    if loop_hz is not None:
        config = replace(config, loop_hz=loop_hz)

    try:
        goal = load_goal(goal_yaml, default_frame=config.canonical_frame)
        transformer = StaticFrameTransformer(load_frames(goal_yaml))
    except (RuntimeError, TypeError, ValueError) as err:
        raise click.ClickException(str(err)) from err

    arm = SimulatedArmController(
        base_frame=config.canonical_frame,
        finger_limits=SIMULATED_FINGER_LIMITS if goal.carries_fingers else None,
        motion_duration_s=motion_s,
        fault_after_motions=fault_after,
    )
    executor = TrajectoryExecutor(arm, transformer, config)

    feedback: list[TrajectoryFeedback] = []
    result = executor.execute(goal, publish_feedback=feedback.append)

    console.print(_render_feedback_table(feedback, config.canonical_frame))
    color = OUTCOME_COLORS[result.outcome.name]
    console.print(f"[{color}]{result.outcome.name}[/]: {result.message}")
    if result.pose is not None:
        console.print(f"Final pose: {result.pose}")

    if output_yaml is not None:
        export_yaml_data(result_to_dict(result), output_yaml)

    if not result.success:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()

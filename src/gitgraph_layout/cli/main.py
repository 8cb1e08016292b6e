"""Main CLI interface for Gitgraph Layout."""

import json
import logging
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gitgraph_layout.core.errors import GitgraphError
from gitgraph_layout.core.gitgraph import GitgraphCore, GitgraphOptions
from gitgraph_layout.core.history import load_repository
from gitgraph_layout.core.position import Orientation
from gitgraph_layout.core.rows import Mode
from gitgraph_layout.models.rendered import RenderedData
from gitgraph_layout.models.template import TemplateName

console = Console()


def layout_options(command):
    """Options shared by every command that lays out a repository."""
    options = [
        click.option(
            "--repo",
            "repo_path",
            type=click.Path(exists=True, file_okay=False),
            default=".",
            help="Path to the git repository",
        ),
        click.option(
            "--orientation",
            type=click.Choice([o.value for o in Orientation]),
            default=Orientation.VERTICAL.value,
            help="Direction in which the graph grows",
        ),
        click.option(
            "--compact",
            is_flag=True,
            help="Share rows between pass-through commits",
        ),
        click.option(
            "--template",
            type=click.Choice([t.value for t in TemplateName]),
            default=TemplateName.METRO.value,
            help="Spacing and color preset",
        ),
        click.option(
            "--max-count",
            type=click.IntRange(min=1),
            default=None,
            help="Only lay out the newest N commits",
        ),
        click.option("--json", "as_json", is_flag=True, help="Print JSON output"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_rendered_data(
    repo_path: str,
    orientation: str,
    compact: bool,
    template: str,
    max_count: Optional[int],
) -> RenderedData:
    """Lay out a repository, aborting the command on gitgraph errors."""
    options = GitgraphOptions(
        template=template,
        orientation=orientation,
        mode=Mode.COMPACT if compact else None,
    )
    try:
        gitgraph = GitgraphCore(options)
        load_repository(gitgraph, repo_path, max_count)
    except GitgraphError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e
    return gitgraph.get_rendered_data()


@click.group()
@click.version_option(package_name="gitgraph-layout")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Gitgraph Layout - compute git history graph layouts."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command()
@layout_options
def layout(repo_path, orientation, compact, template, max_count, as_json):
    """Show the position and color of every commit."""
    data = build_rendered_data(repo_path, orientation, compact, template, max_count)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "commits": [
                        commit.model_dump(mode="json", exclude={"style"})
                        for commit in data.commits
                    ],
                    "commit_messages_x": data.commit_messages_x,
                },
                indent=2,
            )
        )
        return

    if not data.commits:
        console.print("[yellow]No commits found[/yellow]")
        return

    table = Table(title="Commit Layout")
    table.add_column("Hash", style="cyan", no_wrap=True)
    table.add_column("Subject")
    table.add_column("Branch", style="green")
    table.add_column("Row", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("X", justify="right", style="magenta")
    table.add_column("Y", justify="right", style="magenta")
    table.add_column("Color")
    table.add_column("Refs", style="yellow")
    table.add_column("Tags", style="yellow")

    for commit in reversed(data.commits):
        table.add_row(
            commit.hash_abbrev,
            escape(commit.subject),
            escape(commit.branch_to_display),
            str(commit.row),
            str(commit.column),
            f"{commit.x:g}",
            f"{commit.y:g}",
            f"[{commit.color}]{commit.color}[/]",
            escape(", ".join(r for r in commit.refs if r != "HEAD")),
            escape(", ".join(commit.tags)),
        )

    console.print(table)
    console.print(f"[bold]Commit messages x:[/bold] {data.commit_messages_x:g}")


@main.command()
@layout_options
def paths(repo_path, orientation, compact, template, max_count, as_json):
    """Show the polylines drawn for each branch."""
    data = build_rendered_data(repo_path, orientation, compact, template, max_count)

    if as_json:
        click.echo(
            json.dumps(
                [path.model_dump(mode="json") for path in data.branches_paths.values()],
                indent=2,
            )
        )
        return

    if not data.branches_paths:
        console.print("[yellow]No branches found[/yellow]")
        return

    for path in data.branches_paths.values():
        console.print(
            f"[bold][{path.color}]{escape(path.branch_name)}[/][/bold] "
            f"(column {path.column}, {path.color})"
        )
        for segment in path.segments:
            points = " -> ".join(
                f"{'~' if point.bend else ''}({point.x:g}, {point.y:g})"
                for point in segment
            )
            console.print(f"  {points}")


if __name__ == "__main__":
    main()

"""OneDrive CLI - Main commands."""
import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="onedrive",
    help="OneDrive cloud storage CLI",
    add_completion=False
)
console = Console()

TOKEN_ENV = "ONEDRIVE_ACCESS_TOKEN"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def get_token(ctx: typer.Context) -> str:
    token = (ctx.obj or {}).get("token") or os.environ.get(TOKEN_ENV)
    if not token:
        console.print(f"[red]No access token. Pass --token or set {TOKEN_ENV}.[/red]")
        raise typer.Exit(1)
    return token


def format_size(size: int) -> str:
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-t", help=f"Access token (or {TOKEN_ENV})"),
):
    """OneDrive cloud storage CLI."""
    ctx.obj = {"token": token}


async def _resolve(drive, path: str):
    from onedrivepy import RemoteError

    try:
        return await drive.get_by_path(path)
    except RemoteError as e:
        if e.status == 404:
            console.print(f"[red]Path not found: {path}[/red]")
            raise typer.Exit(1)
        raise


def _run(ctx: typer.Context, action):
    """Run an action with a connected client, reporting SDK errors."""
    from onedrivepy import OneDriveClient, OneDriveException

    token = get_token(ctx)

    async def runner():
        async with OneDriveClient(token) as drive:
            return await action(drive)

    try:
        return run_async(runner())
    except OneDriveException as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def ls(
    ctx: typer.Context,
    path: str = typer.Argument("/", help="Folder path to list"),
    long: bool = typer.Option(False, "-l", "--long", help="Long format with details"),
):
    """List files and folders."""
    async def list_files(drive):
        folder = await _resolve(drive, path)
        children = await drive.list(folder.id)

        if long:
            table = Table()
            table.add_column("Type", style="cyan")
            table.add_column("Size", justify="right")
            table.add_column("Name")
            table.add_column("ID", style="dim")

            for child in children:
                type_str = "D" if child.is_folder else "F"
                size_str = "-" if child.is_folder else f"{child.size:,}"
                table.add_row(type_str, size_str, child.name, child.id)

            console.print(table)
        else:
            for child in children:
                if child.is_folder:
                    console.print(f"[blue]{child.name}/[/blue]")
                else:
                    console.print(child.name)

    _run(ctx, list_files)


@app.command()
def info(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder path"),
):
    """Show item details."""
    async def show_info(drive):
        item = await _resolve(drive, path)
        console.print(f"[bold]Name:[/bold] {item.name}")
        console.print(f"[bold]ID:[/bold] {item.id}")
        console.print(f"[bold]Type:[/bold] {'Folder' if item.is_folder else 'File'}")
        console.print(f"[bold]Size:[/bold] {format_size(item.size)} ({item.size:,} bytes)")
        if item.file and item.file.mime_type:
            console.print(f"[bold]MIME type:[/bold] {item.file.mime_type}")
        if item.folder:
            console.print(f"[bold]Children:[/bold] {item.folder.child_count}")
        if item.web_url:
            console.print(f"[bold]URL:[/bold] {item.web_url}")

    _run(ctx, show_info)


@app.command()
def mkdir(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Folder name"),
    parent: str = typer.Option("/", "--parent", "-p", help="Parent folder path"),
):
    """Create a folder."""
    async def create(drive):
        parent_item = await _resolve(drive, parent)
        folder = await drive.create_folder(name, parent_item.id)
        console.print(f"[green]Created folder:[/green] {folder.name}")
        console.print(f"ID: {folder.id}")

    _run(ctx, create)


@app.command()
def rm(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to delete"),
    force: bool = typer.Option(False, "-f", "--force", help="Delete without confirmation"),
):
    """Delete a file or folder (moves it to the recycle bin)."""
    if not force and not typer.confirm(f"Delete {path}?"):
        raise typer.Exit(0)

    async def delete(drive):
        item = await _resolve(drive, path)
        await drive.delete(item.id)
        console.print(f"[green]Deleted:[/green] {item.name}")

    _run(ctx, delete)


@app.command()
def mv(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Source file/folder"),
    dest: str = typer.Argument(..., help="Destination folder"),
):
    """Move a file or folder."""
    async def move(drive):
        item = await _resolve(drive, source)
        target = await _resolve(drive, dest)
        result = await drive.move(item.id, target.id)
        console.print(f"[green]Moved:[/green] {result.name} -> {dest}")

    _run(ctx, move)


@app.command()
def rename(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to rename"),
    new_name: str = typer.Argument(..., help="New name"),
):
    """Rename a file or folder."""
    async def do_rename(drive):
        item = await _resolve(drive, path)
        result = await drive.rename(item.id, new_name)
        console.print(f"[green]Renamed:[/green] {item.name} -> {result.name}")

    _run(ctx, do_rename)


@app.command()
def cp(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Source file/folder"),
    dest: str = typer.Argument(..., help="Destination folder"),
    name: str = typer.Option(None, "--name", "-n", help="Name of the copy"),
):
    """Copy a file or folder (runs asynchronously on the server)."""
    async def copy(drive):
        item = await _resolve(drive, source)
        target = await _resolve(drive, dest)
        result = await drive.copy(item.id, target.id, name or item.name)
        console.print(f"[green]Copy started:[/green] {item.name} -> {dest}")
        if result.location:
            console.print(f"Monitor: {result.location}")

    _run(ctx, copy)


@app.command()
def upload(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True),
    dest: str = typer.Option("/", "--dest", "-d", help="Destination folder path"),
    name: str = typer.Option(None, "--name", "-n", help="Custom file name"),
    conflict: str = typer.Option(None, "--conflict", "-c", help="On name clash: fail, replace or rename"),
    chunk_size: int = typer.Option(4 * 1024 * 1024, "--chunk-size", help="Chunk size in bytes"),
):
    """Upload a file through an upload session."""
    from onedrivepy import UploadProgress

    async def do_upload(drive):
        folder = await _resolve(drive, dest)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task(f"Uploading {file_path.name}", total=100)

            def on_progress(p: UploadProgress):
                progress.update(task, completed=p.percentage)

            item = await drive.upload(
                file_path,
                folder.id,
                name=name,
                conflict_behavior=conflict,
                chunk_size=chunk_size,
                progress_callback=on_progress
            )

        console.print(f"[green]Uploaded:[/green] {item.name}")
        console.print(f"ID: {item.id}")
        console.print(f"Size: {item.size:,} bytes")

    _run(ctx, do_upload)


@app.command()
def download(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file path"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """Download a file."""
    async def do_download(drive):
        item = await _resolve(drive, path)
        if not item.is_file:
            console.print(f"[red]Not a file: {path}[/red]")
            raise typer.Exit(1)
        target = output or Path(item.name)
        data = await drive.download(item, target)
        console.print(f"[green]Downloaded:[/green] {target} ({len(data):,} bytes)")

    _run(ctx, do_download)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()

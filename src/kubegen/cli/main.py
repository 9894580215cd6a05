"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Any, Callable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from kubegen.decoder.config import ConfigDecoder
from kubegen.errors import KubernetesPluginError
from kubegen.models.config import GeneratorConfig
from kubegen.pipeline.engine import ArtifactPipeline
from kubegen.pipeline.linker import ModelLinker
from kubegen.pipeline.loader import ConfigLoader
from kubegen.pipeline.registry import ModelRegistry
from kubegen.utils.files import delete_directory, extract_balx_name
from kubegen.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="kubegen",
    help="kubegen - Kubernetes and Docker artifact generation",
    add_completion=False,
)

# Console for rich output
console = Console()


def _run_cli_command(handler: Callable[..., Any], **kwargs: Any):
    """Helper to run a CLI command with error handling."""
    try:
        handler(**kwargs)
    except KubernetesPluginError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def print_progress(label: str, done: int, total: int) -> None:
    """Progress observer printing ``@kubernetes:Service  - complete 1/2``."""
    console.print(f"{label:<32} - complete {done}/{total}", highlight=False)


def _load_registry(config_file: Optional[Path], config: GeneratorConfig) -> ModelRegistry:
    """Decode the build description, or start empty when there is none."""
    if config_file is None:
        return ModelRegistry()
    return ConfigLoader(ConfigDecoder(config)).load_file(config_file)


def build_artifacts(
    artifact: Path,
    config_file: Optional[Path],
    output_dir: Path,
    config: GeneratorConfig,
    clean: bool = False,
    quiet: bool = False,
):
    """Generate manifests and the docker image for an artifact."""
    registry = _load_registry(config_file, config)
    if clean:
        delete_directory(output_dir)

    pipeline = ArtifactPipeline(
        registry,
        artifact,
        output_dir,
        config=config,
        progress=None if quiet else print_progress,
    )
    result = pipeline.create_artifacts()

    if not quiet:
        console.print()
        console.print("[cyan]Run following command to deploy kubernetes artifacts:[/cyan]")
        console.print(f"[cyan]{result.instruction}[/cyan]", highlight=False)


def validate_artifacts(artifact: Path, config_file: Optional[Path], config: GeneratorConfig):
    """Decode and link the build description without writing anything."""
    registry = _load_registry(config_file, config)
    linked = ModelLinker(registry, extract_balx_name(artifact)).link()

    table = Table(title="Resources")
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Details", style="dim")

    deployment = linked.deployment
    table.add_row("Deployment", deployment.name, f"image={deployment.image} replicas={deployment.replicas}")
    for service in linked.services:
        table.add_row("Service", service.name, f"{service.service_type} port={service.port}")
    for ingress in linked.ingresses:
        tls = "tls" if ingress.enable_tls else "plain"
        table.add_row("Ingress", ingress.name, f"{ingress.hostname} -> {ingress.service_name} ({tls})")
    for secret in linked.secrets:
        table.add_row("Secret", secret.name, secret.mount_path)
    for config_map in linked.config_maps:
        table.add_row("ConfigMap", config_map.name, config_map.mount_path)
    for claim in linked.volume_claims:
        table.add_row("PersistentVolumeClaim", claim.name, claim.mount_path)
    if linked.pod_autoscaler:
        hpa = linked.pod_autoscaler
        table.add_row("HPA", hpa.name, f"{hpa.min_replicas}-{hpa.max_replicas} cpu={hpa.cpu_percentage}%")

    console.print(table)
    console.print("[green]✓[/green] Configuration is valid")


def _make_config(
    log_level: str,
    ballerina_home: Optional[str],
    docker_binary: str,
    debug_port: Optional[int] = None,
) -> GeneratorConfig:
    try:
        config = GeneratorConfig(
            log_level=log_level,
            ballerina_home=ballerina_home,
            docker_binary=docker_binary,
            debug_port=debug_port,
        )
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e.errors()[0]['msg']}")
        raise typer.Exit(1) from e
    setup_logging(config.log_level)
    return config


@app.command("build")
def build_command(
    artifact: Path = typer.Argument(..., help="Compiled .balx artifact"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML build description"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (default: <artifact dir>/kubernetes)"
    ),
    clean: bool = typer.Option(
        False, "--clean", help="Delete the output directory before generating"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress progress output"),
    ballerina_home: Optional[str] = typer.Option(
        None, "--ballerina-home", envvar="BALLERINA_HOME", help="Local runtime home"
    ),
    docker_binary: str = typer.Option("docker", "--docker", help="Docker executable"),
    debug_port: Optional[int] = typer.Option(
        None, "--debug-port", help="Run the image in debug mode on this port"
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar="KUBEGEN_LOG_LEVEL", help="Log level"
    ),
):
    """Generate Kubernetes artifacts and the docker image."""
    config = _make_config(log_level, ballerina_home, docker_binary, debug_port)
    _run_cli_command(
        build_artifacts,
        artifact=artifact,
        config_file=config_file,
        output_dir=output_dir or artifact.parent / "kubernetes",
        config=config,
        clean=clean,
        quiet=quiet,
    )


@app.command("validate")
def validate_command(
    artifact: Path = typer.Argument(..., help="Compiled .balx artifact"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML build description"
    ),
    ballerina_home: Optional[str] = typer.Option(
        None, "--ballerina-home", envvar="BALLERINA_HOME", help="Local runtime home"
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar="KUBEGEN_LOG_LEVEL", help="Log level"
    ),
):
    """Validate a build description without writing artifacts."""
    config = _make_config(log_level, ballerina_home, "docker")
    _run_cli_command(
        validate_artifacts,
        artifact=artifact,
        config_file=config_file,
        config=config,
    )


def main():
    """Main entry point for CLI."""
    app()

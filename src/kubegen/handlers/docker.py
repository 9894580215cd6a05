"""Docker build file generation and image build/push."""

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from kubegen.constants import BALX, DEFAULT_DEBUG_PORT, DOCKERFILE
from kubegen.errors import ArtifactIOError, ProcessError
from kubegen.handlers.base import BaseHandler, ProgressCallback
from kubegen.models.config import GeneratorConfig
from kubegen.models.deployment import DeploymentModel
from kubegen.models.docker import DockerModel
from kubegen.utils.files import copy_file, extract_balx_name, write_to_file
from kubegen.utils.process import run_command
from kubegen.utils.templates import render_template


logger = logging.getLogger(__name__)

DOCKER_PROGRESS_LABEL = "@docker"
DOCKER_STEPS = 3

DOCKERFILE_TEMPLATE = """\
# Auto Generated Dockerfile

FROM {{ base_image }}
LABEL maintainer="dev@ballerina.io"

COPY {{ balx_file_name }} /home/ballerina

{% if service and ports %}
EXPOSE {{ ports | join(" ") }}

{% endif %}
{% if enable_debug %}
EXPOSE {{ debug_port }}
CMD ballerina run --debug {{ debug_port }} {{ balx_file_name }}
{% else %}
CMD ballerina run {{ balx_file_name }}
{% endif %}
"""


def parse_image_tag(image: str) -> str:
    """Return the tag of an image reference: the suffix after the last ``:``.

    Only the last path segment is searched, so the port of a registry host
    (``host:5000/app``) is not mistaken for a tag. An untagged reference gets
    ``latest``, which ``tagged_reference`` then makes explicit for docker.
    """
    last_segment = image.rsplit("/", 1)[-1]
    if ":" not in last_segment:
        return "latest"
    return last_segment.rsplit(":", 1)[1]


def tagged_reference(model: DockerModel) -> str:
    """Return the image reference with its tag spelled out."""
    if ":" in model.name.rsplit("/", 1)[-1]:
        return model.name
    return f"{model.name}:{model.tag}"


def registry_of(image: str) -> Optional[str]:
    """Return the registry host of an image reference, or None for Docker Hub."""
    if "/" not in image:
        return None
    first = image.split("/", 1)[0]
    if "." in first or ":" in first or first == "localhost":
        return first
    return None


def build_docker_model(
    deployment: DeploymentModel,
    balx_file_path: str,
    config: Optional[GeneratorConfig] = None,
) -> DockerModel:
    """Derive the image build model from a linked deployment.

    Ports are exposed only when the deployment listens on any. A debug port
    set on the generator config starts the runtime in debug mode.
    """
    config = config or GeneratorConfig()
    return DockerModel(
        base_image=deployment.base_image,
        name=deployment.image,
        tag=parse_image_tag(deployment.image),
        username=deployment.username,
        password=deployment.password,
        push=deployment.push,
        build_image=deployment.build_image,
        balx_file_name=extract_balx_name(balx_file_path) + BALX,
        ports=list(deployment.ports),
        service=bool(deployment.ports),
        enable_debug=config.debug_port is not None,
        debug_port=config.debug_port or DEFAULT_DEBUG_PORT,
        docker_host=deployment.docker_host,
        docker_cert_path=deployment.docker_cert_path,
    )


class DockerHandler(BaseHandler):
    """Writes the Dockerfile and drives ``docker build`` / ``docker push``."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize docker handler."""
        super().__init__()
        self.config = config or GeneratorConfig()

    def generate(self, model: DockerModel) -> str:
        """Render the Dockerfile."""
        return render_template(
            DOCKERFILE_TEMPLATE,
            base_image=model.base_image,
            balx_file_name=model.balx_file_name,
            service=model.service,
            ports=model.ports,
            enable_debug=model.enable_debug,
            debug_port=model.debug_port,
        )

    def create_artifacts(
        self,
        model: DockerModel,
        balx_file_path: str,
        output_dir: Path,
        progress: Optional[ProgressCallback] = None,
    ) -> List[Path]:
        """Write the Dockerfile, stage the binary, then build and push if enabled.

        Returns the paths left on disk. Nothing already written is rolled
        back when a later step fails.
        """
        report = progress or (lambda label, done, total: None)
        output_dir = Path(output_dir)
        report(DOCKER_PROGRESS_LABEL, 0, DOCKER_STEPS)

        dockerfile = output_dir / DOCKERFILE
        write_to_file(self.generate(model), dockerfile)
        report(DOCKER_PROGRESS_LABEL, 1, DOCKER_STEPS)

        staged_binary = output_dir / model.balx_file_name
        copy_file(balx_file_path, staged_binary)
        written = [dockerfile, staged_binary]

        if not model.build_image:
            logger.info(f"Image build disabled; staged {staged_binary}")
            return written

        self.build_image(model, output_dir)
        report(DOCKER_PROGRESS_LABEL, 2, DOCKER_STEPS)
        try:
            staged_binary.unlink()
        except OSError as e:
            raise ArtifactIOError(f"Unable to delete staged binary {staged_binary}") from e
        written.remove(staged_binary)

        if model.push:
            self.push_image(model)
        report(DOCKER_PROGRESS_LABEL, 3, DOCKER_STEPS)
        return written

    def build_image(self, model: DockerModel, docker_dir: Path) -> None:
        """Build the image from the docker directory."""
        logger.info(f"Building docker image {model.name}")
        cmd = [
            self.config.docker_binary, "build",
            "--force-rm", "--no-cache",
            "-t", tagged_reference(model),
            str(docker_dir),
        ]
        self._run(cmd, model, f"Unable to build docker image {model.name}")
        logger.info(f"Docker image {model.name} built successfully")

    def push_image(self, model: DockerModel) -> None:
        """Log in when credentials are set, then push the image."""
        if model.username and model.password:
            cmd = [self.config.docker_binary, "login", "--username", model.username, "--password-stdin"]
            registry = registry_of(model.name)
            if registry:
                cmd.append(registry)
            self._run(cmd, model, f"Unable to log in to push {model.name}", input=model.password)

        reference = tagged_reference(model)
        logger.info(f"Pushing docker image {reference}")
        self._run(
            [self.config.docker_binary, "push", reference],
            model,
            f"Unable to push docker image {model.name}",
        )
        logger.info(f"Docker image {model.name} pushed successfully")

    def _run(self, cmd: List[str], model: DockerModel, failure: str, input: Optional[str] = None) -> None:
        """Run a docker command; any failure is fatal."""
        try:
            run_command(cmd, input=input, env=self._docker_env(model))
        except subprocess.CalledProcessError as e:
            logger.error(f"{failure}: {e}. Stderr: {e.stderr}")
            detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
            raise ProcessError(f"{failure}: {detail}") from e
        except OSError as e:
            logger.error(f"{failure}: {e}")
            raise ProcessError(f"{failure}: {e}") from e

    def _docker_env(self, model: DockerModel) -> Dict[str, str]:
        """Environment pointing docker at a remote daemon, if configured."""
        env = {}
        if model.docker_host:
            env["DOCKER_HOST"] = model.docker_host
        if model.docker_cert_path:
            env["DOCKER_CERT_PATH"] = model.docker_cert_path
            env["DOCKER_TLS_VERIFY"] = "1"
        return env

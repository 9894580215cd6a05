"""Artifact generation pipeline."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel

from kubegen.constants import DOCKER
from kubegen.decoder.config import ResourceKind
from kubegen.errors import KubernetesPluginError
from kubegen.handlers.base import ProgressCallback
from kubegen.handlers.docker import DockerHandler, build_docker_model
from kubegen.handlers.registry import HandlerRegistry
from kubegen.models.config import GeneratorConfig
from kubegen.models.deployment import DeploymentModel
from kubegen.pipeline.linker import LinkedModels, ModelLinker
from kubegen.pipeline.registry import ModelRegistry
from kubegen.utils.files import extract_balx_name, write_to_file


logger = logging.getLogger(__name__)

PROGRESS_LABELS = {
    ResourceKind.DEPLOYMENT: "@kubernetes:Deployment",
    ResourceKind.SERVICE: "@kubernetes:Service",
    ResourceKind.INGRESS: "@kubernetes:Ingress",
    ResourceKind.SECRET: "@kubernetes:Secret",
    ResourceKind.CONFIG_MAP: "@kubernetes:ConfigMap",
    ResourceKind.VOLUME_CLAIM: "@kubernetes:volumeClaim",
    ResourceKind.AUTOSCALER: "@kubernetes:HPA",
}


@dataclass
class GenerationResult:
    """Outcome of one build."""
    deployment: DeploymentModel
    output_dir: Path
    artifacts: List[Path] = field(default_factory=list)
    instruction: str = ""


class ArtifactPipeline:
    """Links, renders and writes every artifact of one build.

    Steps run strictly in sequence. The first failure aborts the build and
    leaves whatever was already written on disk.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        balx_file_path: Union[str, Path],
        output_dir: Union[str, Path],
        config: Optional[GeneratorConfig] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        """Initialize pipeline."""
        self.registry = registry
        self.balx_file_path = str(balx_file_path)
        self.output_dir = Path(output_dir)
        self.config = config or GeneratorConfig()
        self.progress = progress
        self.artifact_name = extract_balx_name(self.balx_file_path)
        self.handlers = HandlerRegistry()
        self.handlers.initialize()
        self.docker_handler = DockerHandler(self.config)
        self._written: List[Path] = []

    def create_artifacts(self) -> GenerationResult:
        """Generate all artifacts for the build."""
        logger.info(f"Generating artifacts for {self.artifact_name} in {self.output_dir}")
        try:
            linked = ModelLinker(self.registry, self.artifact_name).link()

            self._generate_deployment(linked)
            self._generate_all(ResourceKind.SERVICE, linked.services)
            self._generate_all(ResourceKind.INGRESS, linked.ingresses)
            self._generate_all(ResourceKind.SECRET, linked.secrets)
            self._generate_all(ResourceKind.CONFIG_MAP, linked.config_maps)
            self._generate_all(ResourceKind.VOLUME_CLAIM, linked.volume_claims)
        except KubernetesPluginError as e:
            logger.error(f"Artifact generation failed: {e}")
            raise

        instruction = f"kubectl apply -f {self.output_dir}"
        logger.info("Artifact generation completed")
        return GenerationResult(
            deployment=linked.deployment,
            output_dir=self.output_dir,
            artifacts=list(self._written),
            instruction=instruction,
        )

    def _generate_deployment(self, linked: LinkedModels) -> None:
        """Write the deployment, then the docker image and the autoscaler."""
        deployment = linked.deployment
        self._write(ResourceKind.DEPLOYMENT, deployment)

        docker_model = build_docker_model(deployment, self.balx_file_path, self.config)
        for path in self.docker_handler.create_artifacts(
            docker_model,
            self.balx_file_path,
            self.output_dir / DOCKER,
            progress=self.progress,
        ):
            self._record(path)

        if linked.pod_autoscaler is not None:
            self._write(ResourceKind.AUTOSCALER, linked.pod_autoscaler)
            self._report(ResourceKind.AUTOSCALER, 1, 1)

        self._report(ResourceKind.DEPLOYMENT, 1, 1)

    def _generate_all(self, kind: ResourceKind, models: Sequence[BaseModel]) -> None:
        """Render and write every model of one kind, then report once."""
        for model in models:
            self._write(kind, model)
        if models:
            self._report(kind, len(models), len(models))

    def _write(self, kind: ResourceKind, model: BaseModel) -> None:
        """Render a model and append it to its kind's output file."""
        content = self.handlers.get_handler(kind).generate(model)
        target = self.output_dir / self.handlers.file_name(kind, self.artifact_name)
        write_to_file(content, target)
        self._record(target)
        logger.debug(f"Wrote {kind.value} {getattr(model, 'name', '')} to {target}")

    def _record(self, path: Path) -> None:
        if path not in self._written:
            self._written.append(path)

    def _report(self, kind: ResourceKind, done: int, total: int) -> None:
        if self.progress:
            self.progress(PROGRESS_LABELS[kind], done, total)

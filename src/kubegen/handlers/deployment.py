"""Deployment manifest handler."""

from typing import Any, Dict, List

from kubegen.constants import VOLUME_POSTFIX
from kubegen.handlers.base import BaseHandler, metadata
from kubegen.models.deployment import DeploymentModel


class DeploymentHandler(BaseHandler):
    """Renders an ``apps/v1`` Deployment."""

    def generate(self, model: DeploymentModel) -> str:
        """Render the deployment manifest."""
        container: Dict[str, Any] = {
            "name": model.name,
            "image": model.image,
            "imagePullPolicy": model.image_pull_policy,
        }
        if model.ports:
            container["ports"] = [
                {"containerPort": port, "protocol": "TCP"} for port in model.ports
            ]
        if model.env:
            container["env"] = [
                {"name": name, "value": value} for name, value in model.env.items()
            ]
        if model.enable_liveness:
            container["livenessProbe"] = {
                "tcpSocket": {"port": model.liveness_port},
                "initialDelaySeconds": model.initial_delay_seconds,
                "periodSeconds": model.period_seconds,
            }

        volume_mounts = self._volume_mounts(model)
        if volume_mounts:
            container["volumeMounts"] = volume_mounts

        pod_spec: Dict[str, Any] = {"containers": [container]}
        volumes = self._volumes(model)
        if volumes:
            pod_spec["volumes"] = volumes

        document = {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": metadata(model.name, model.labels, namespace=model.namespace),
            "spec": {
                "replicas": model.replicas,
                "selector": {"matchLabels": dict(model.labels)},
                "template": {
                    "metadata": {"labels": dict(model.labels)},
                    "spec": pod_spec,
                },
            },
        }
        return self.dump(document)

    def _volume_mounts(self, model: DeploymentModel) -> List[Dict[str, Any]]:
        """Mount every secret, config map and claim at its mount path."""
        mounts = []
        for volume in [*model.secrets, *model.config_maps, *model.volume_claims]:
            mounts.append({
                "name": volume.name + VOLUME_POSTFIX,
                "mountPath": volume.mount_path,
                "readOnly": volume.read_only,
            })
        return mounts

    def _volumes(self, model: DeploymentModel) -> List[Dict[str, Any]]:
        """Declare the pod volumes backing each mount."""
        volumes = []
        for secret in model.secrets:
            volumes.append({
                "name": secret.name + VOLUME_POSTFIX,
                "secret": {"secretName": secret.name},
            })
        for config_map in model.config_maps:
            volumes.append({
                "name": config_map.name + VOLUME_POSTFIX,
                "configMap": {"name": config_map.name},
            })
        for claim in model.volume_claims:
            volumes.append({
                "name": claim.name + VOLUME_POSTFIX,
                "persistentVolumeClaim": {"claimName": claim.name},
            })
        return volumes

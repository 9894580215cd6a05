"""Horizontal pod autoscaler manifest handler."""

from kubegen.handlers.base import BaseHandler, metadata
from kubegen.models.autoscaler import PodAutoscalerModel


class HPAHandler(BaseHandler):
    """Renders an ``autoscaling/v1`` HorizontalPodAutoscaler."""

    def generate(self, model: PodAutoscalerModel) -> str:
        """Render the autoscaler manifest."""
        document = {
            "apiVersion": "autoscaling/v1",
            "kind": "HorizontalPodAutoscaler",
            "metadata": metadata(model.name, model.labels),
            "spec": {
                "scaleTargetRef": {
                    "apiVersion": "apps/v1",
                    "kind": "Deployment",
                    "name": model.deployment,
                },
                "minReplicas": model.min_replicas,
                "maxReplicas": model.max_replicas,
                "targetCPUUtilizationPercentage": model.cpu_percentage,
            },
        }
        return self.dump(document)

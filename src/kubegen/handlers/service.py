"""Service manifest handler."""

from kubegen.constants import KUBERNETES_SELECTOR_KEY
from kubegen.handlers.base import BaseHandler, metadata
from kubegen.models.service import ServiceModel


class ServiceHandler(BaseHandler):
    """Renders a ``v1`` Service."""

    def generate(self, model: ServiceModel) -> str:
        """Render the service manifest."""
        document = {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": metadata(model.name, model.labels),
            "spec": {
                "ports": [
                    {"port": model.port, "protocol": "TCP", "targetPort": model.port}
                ],
                "selector": {KUBERNETES_SELECTOR_KEY: model.selector},
                "type": model.service_type,
            },
        }
        return self.dump(document)

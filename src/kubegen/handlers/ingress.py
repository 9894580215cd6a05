"""Ingress manifest handler."""

from typing import Any, Dict

from kubegen.handlers.base import BaseHandler, metadata
from kubegen.models.service import IngressModel


INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"
REWRITE_TARGET_ANNOTATION = "nginx.ingress.kubernetes.io/rewrite-target"
SSL_PASSTHROUGH_ANNOTATION = "nginx.ingress.kubernetes.io/ssl-passthrough"


class IngressHandler(BaseHandler):
    """Renders a ``networking.k8s.io/v1`` Ingress routed to its linked service."""

    def generate(self, model: IngressModel) -> str:
        """Render the ingress manifest."""
        annotations = {INGRESS_CLASS_ANNOTATION: model.ingress_class}
        if model.target_path:
            annotations[REWRITE_TARGET_ANNOTATION] = model.target_path
        if model.enable_tls:
            annotations[SSL_PASSTHROUGH_ANNOTATION] = "true"

        meta = metadata(model.name, model.labels)
        meta["annotations"] = annotations

        spec: Dict[str, Any] = {}
        if model.enable_tls:
            spec["tls"] = [{"hosts": [model.hostname]}]
        spec["rules"] = [
            {
                "host": model.hostname,
                "http": {
                    "paths": [
                        {
                            "path": model.path,
                            "pathType": "Prefix",
                            "backend": {
                                "service": {
                                    "name": model.service_name,
                                    "port": {"number": model.service_port},
                                }
                            },
                        }
                    ]
                },
            }
        ]

        document = {
            "apiVersion": "networking.k8s.io/v1",
            "kind": "Ingress",
            "metadata": meta,
            "spec": spec,
        }
        return self.dump(document)

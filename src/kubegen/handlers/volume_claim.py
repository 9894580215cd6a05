"""Persistent volume claim manifest handler."""

from typing import Any, Dict

from kubegen.handlers.base import BaseHandler, metadata
from kubegen.models.volume import PersistentVolumeClaimModel


class PersistentVolumeClaimHandler(BaseHandler):
    """Renders a PersistentVolumeClaim."""

    def generate(self, model: PersistentVolumeClaimModel) -> str:
        """Render the volume claim manifest."""
        spec: Dict[str, Any] = {"accessModes": [model.access_mode]}
        if model.volume_claim_size:
            spec["resources"] = {"requests": {"storage": model.volume_claim_size}}

        document = {
            "apiVersion": "v1",
            "kind": "PersistentVolumeClaim",
            "metadata": metadata(model.name),
            "spec": spec,
        }
        return self.dump(document)

"""Secret manifest handler."""

from kubegen.handlers.base import BaseHandler, metadata
from kubegen.models.volume import SecretModel


class SecretHandler(BaseHandler):
    """Renders an ``Opaque`` Secret; data values are already base64 encoded."""

    def generate(self, model: SecretModel) -> str:
        """Render the secret manifest."""
        document = {
            "apiVersion": "v1",
            "kind": "Secret",
            "metadata": metadata(model.name),
            "type": "Opaque",
            "data": dict(model.data),
        }
        return self.dump(document)

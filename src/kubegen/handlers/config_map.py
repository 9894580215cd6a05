"""Config map manifest handler."""

from kubegen.handlers.base import BaseHandler, metadata, text_block
from kubegen.models.volume import ConfigMapModel


class ConfigMapHandler(BaseHandler):
    """Renders a ConfigMap holding raw file text."""

    def generate(self, model: ConfigMapModel) -> str:
        """Render the config map manifest."""
        document = {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": metadata(model.name),
            "data": {key: text_block(value) for key, value in model.data.items()},
        }
        return self.dump(document)

"""Handler registry mapping resource kinds to renderers and output files."""

import logging
from typing import Dict, Optional, Tuple, Type

from kubegen.constants import (
    CONFIG_MAP_FILE_POSTFIX,
    DEPLOYMENT_FILE_POSTFIX,
    HPA_FILE_POSTFIX,
    INGRESS_FILE_POSTFIX,
    SECRET_FILE_POSTFIX,
    SVC_FILE_POSTFIX,
    VOLUME_CLAIM_FILE_POSTFIX,
    YAML,
)
from kubegen.decoder.config import ResourceKind
from kubegen.handlers.autoscaler import HPAHandler
from kubegen.handlers.base import BaseHandler
from kubegen.handlers.config_map import ConfigMapHandler
from kubegen.handlers.deployment import DeploymentHandler
from kubegen.handlers.ingress import IngressHandler
from kubegen.handlers.secret import SecretHandler
from kubegen.handlers.service import ServiceHandler
from kubegen.handlers.volume_claim import PersistentVolumeClaimHandler


logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry for resource handlers."""

    def __init__(self):
        """Initialize handler registry."""
        self._handlers: Dict[ResourceKind, BaseHandler] = {}
        self._handler_classes: Dict[ResourceKind, Tuple[Type[BaseHandler], str]] = {
            ResourceKind.DEPLOYMENT: (DeploymentHandler, DEPLOYMENT_FILE_POSTFIX),
            ResourceKind.SERVICE: (ServiceHandler, SVC_FILE_POSTFIX),
            ResourceKind.INGRESS: (IngressHandler, INGRESS_FILE_POSTFIX),
            ResourceKind.SECRET: (SecretHandler, SECRET_FILE_POSTFIX),
            ResourceKind.CONFIG_MAP: (ConfigMapHandler, CONFIG_MAP_FILE_POSTFIX),
            ResourceKind.VOLUME_CLAIM: (PersistentVolumeClaimHandler, VOLUME_CLAIM_FILE_POSTFIX),
            ResourceKind.AUTOSCALER: (HPAHandler, HPA_FILE_POSTFIX),
        }

    def initialize(self):
        """Instantiate every handler."""
        for kind, (handler_class, _) in self._handler_classes.items():
            try:
                self._handlers[kind] = handler_class()
            except Exception as e:
                logger.error(f"Failed to instantiate handler {kind.value}: {e}")
                raise
            logger.debug(f"Initialized handler: {kind.value}")

    def get_handler(self, kind: ResourceKind) -> Optional[BaseHandler]:
        """Get a handler by resource kind."""
        return self._handlers.get(kind)

    def file_name(self, kind: ResourceKind, artifact_name: str) -> str:
        """Output file name for a kind, e.g. ``hello_svc.yaml``."""
        _, postfix = self._handler_classes[kind]
        return artifact_name + postfix + YAML

    def list_handlers(self) -> list[ResourceKind]:
        """List initialized resource kinds."""
        return list(self._handlers.keys())

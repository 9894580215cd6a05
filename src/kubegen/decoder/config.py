"""Decode raw configuration blocks into typed resource models.

Every resource kind owns a dispatch table mapping each recognized key to a
setter. The key set is closed: an unknown key fails decoding.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from kubegen.constants import INGRESS_HOSTNAME_POSTFIX, INGRESS_POSTFIX, SVC_POSTFIX
from kubegen.decoder.secure_socket import (
    data_key,
    process_secure_socket,
    read_config_map_file,
    read_secret_file,
)
from kubegen.decoder.source import ConfigSource, as_array, as_text, iter_pairs
from kubegen.decoder.values import (
    normalize_name,
    parse_bool,
    parse_env,
    parse_int,
    parse_labels,
    parse_liveness,
    resolve_value,
)
from kubegen.errors import ConfigError
from kubegen.models.autoscaler import PodAutoscalerModel
from kubegen.models.config import GeneratorConfig
from kubegen.models.deployment import DeploymentModel
from kubegen.models.service import IngressModel, ServiceModel
from kubegen.models.volume import ConfigMapModel, PersistentVolumeClaimModel, SecretModel


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Setter = Callable[["ConfigDecoder", BaseModel, str, Any], None]


class ResourceKind(Enum):
    """Resource kinds a configuration block can declare."""
    DEPLOYMENT = "deployment"
    SERVICE = "service"
    INGRESS = "ingress"
    SECRET = "secret"
    CONFIG_MAP = "config-map"
    VOLUME_CLAIM = "volume-claim"
    AUTOSCALER = "autoscaler"


def _field(field: str, convert: Optional[Callable[[str, str], Any]] = None) -> Setter:
    """Setter that resolves a scalar value and assigns it to ``field``."""
    def setter(decoder: "ConfigDecoder", model: BaseModel, key: str, value: Any) -> None:
        text = resolve_value(as_text(key, value))
        setattr(model, field, convert(text, key) if convert else text)
    return setter


def _name(value: str, key: str) -> str:
    return normalize_name(value)


def _labels(value: str, key: str) -> Dict[str, str]:
    return parse_labels(value)


def _env(value: str, key: str) -> Dict[str, str]:
    return parse_env(value)


def _secret_data(decoder: "ConfigDecoder", model: BaseModel, key: str, value: Any) -> None:
    data = {}
    for item in as_array(key, value):
        file_path = resolve_value(as_text(key, item))
        data[data_key(file_path)] = read_secret_file(file_path, decoder.config)
    model.data = data


def _config_map_data(decoder: "ConfigDecoder", model: BaseModel, key: str, value: Any) -> None:
    data = {}
    for item in as_array(key, value):
        file_path = resolve_value(as_text(key, item))
        data[data_key(file_path)] = read_config_map_file(file_path, decoder.config)
    model.data = data


DEPLOYMENT_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "labels": _field("labels", _labels),
    "replicas": _field("replicas", parse_int),
    "enableLiveness": _field("enable_liveness", parse_liveness),
    "livenessPort": _field("liveness_port", parse_int),
    "initialDelaySeconds": _field("initial_delay_seconds", parse_int),
    "periodSeconds": _field("period_seconds", parse_int),
    "imagePullPolicy": _field("image_pull_policy"),
    "namespace": _field("namespace"),
    "image": _field("image"),
    "env": _field("env", _env),
    "buildImage": _field("build_image", parse_bool),
    "dockerHost": _field("docker_host"),
    "username": _field("username"),
    "password": _field("password"),
    "baseImage": _field("base_image"),
    "push": _field("push", parse_bool),
    "dockerCertPath": _field("docker_cert_path"),
}

SERVICE_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "labels": _field("labels", _labels),
    "serviceType": _field("service_type"),
    "port": _field("port", parse_int),
}

INGRESS_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "labels": _field("labels", _labels),
    "hostname": _field("hostname"),
    "path": _field("path"),
    "targetPath": _field("target_path"),
    "ingressClass": _field("ingress_class"),
    "enableTLS": _field("enable_tls", parse_bool),
}

AUTOSCALER_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "labels": _field("labels", _labels),
    "minReplicas": _field("min_replicas", parse_int),
    "maxReplicas": _field("max_replicas", parse_int),
    "cpuPercentage": _field("cpu_percentage", parse_int),
}

SECRET_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "mountPath": _field("mount_path"),
    "readOnly": _field("read_only", parse_bool),
    "data": _secret_data,
}

CONFIG_MAP_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "mountPath": _field("mount_path"),
    "readOnly": _field("read_only", parse_bool),
    "data": _config_map_data,
}

VOLUME_CLAIM_KEYS: Dict[str, Setter] = {
    "name": _field("name", _name),
    "mountPath": _field("mount_path"),
    "readOnly": _field("read_only", parse_bool),
    "accessMode": _field("access_mode"),
    "volumeClaimSize": _field("volume_claim_size"),
}


class ConfigDecoder:
    """Decodes configuration blocks into resource models."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize decoder."""
        self.config = config or GeneratorConfig()

    def decode_deployment(self, source: ConfigSource) -> DeploymentModel:
        """Decode a deployment block."""
        return self._apply(ResourceKind.DEPLOYMENT, DeploymentModel(), source, DEPLOYMENT_KEYS)

    def decode_service(self, endpoint_name: str, source: ConfigSource) -> ServiceModel:
        """Decode a service block attached to an endpoint."""
        service = self._apply(ResourceKind.SERVICE, ServiceModel(), source, SERVICE_KEYS)
        if not service.name:
            service.name = normalize_name(endpoint_name) + SVC_POSTFIX
        return service

    def decode_ingress(self, endpoint_name: str, source: ConfigSource) -> IngressModel:
        """Decode an ingress block; name and hostname default from the endpoint name."""
        ingress = self._apply(ResourceKind.INGRESS, IngressModel(), source, INGRESS_KEYS)
        if not ingress.name:
            ingress.name = normalize_name(endpoint_name) + INGRESS_POSTFIX
        if not ingress.hostname:
            ingress.hostname = normalize_name(endpoint_name) + INGRESS_HOSTNAME_POSTFIX
        return ingress

    def decode_autoscaler(self, source: ConfigSource) -> PodAutoscalerModel:
        """Decode a pod autoscaler block."""
        return self._apply(ResourceKind.AUTOSCALER, PodAutoscalerModel(), source, AUTOSCALER_KEYS)

    def decode_secrets(self, source: ConfigSource) -> List[SecretModel]:
        """Decode a ``secrets`` block holding an array of secret entries."""
        return self._decode_entries(ResourceKind.SECRET, source, "secrets", SecretModel, SECRET_KEYS)

    def decode_config_maps(self, source: ConfigSource) -> List[ConfigMapModel]:
        """Decode a ``configMaps`` block holding an array of config map entries."""
        return self._decode_entries(
            ResourceKind.CONFIG_MAP, source, "configMaps", ConfigMapModel, CONFIG_MAP_KEYS
        )

    def decode_volume_claims(self, source: ConfigSource) -> List[PersistentVolumeClaimModel]:
        """Decode a ``volumeClaims`` block holding an array of claim entries."""
        return self._decode_entries(
            ResourceKind.VOLUME_CLAIM,
            source,
            "volumeClaims",
            PersistentVolumeClaimModel,
            VOLUME_CLAIM_KEYS,
        )

    def decode_secure_socket(self, endpoint_name: str, source: ConfigSource) -> List[SecretModel]:
        """Extract key/trust store secrets from an endpoint's secured transport block."""
        return process_secure_socket(endpoint_name, source, self.config)

    def decode(self, kind: ResourceKind, source: ConfigSource, endpoint_name: Optional[str] = None):
        """Decode a block of any kind.

        Service and ingress blocks need the name of the endpoint they are
        attached to. Secret, config map and volume claim blocks return lists.
        """
        try:
            kind = ResourceKind(kind)
        except ValueError as e:
            raise ConfigError(f"Unknown resource kind: {kind}") from e
        if kind in (ResourceKind.SERVICE, ResourceKind.INGRESS):
            if not endpoint_name:
                raise ConfigError(f"A {kind.value} block must be attached to an endpoint")
            if kind is ResourceKind.SERVICE:
                return self.decode_service(endpoint_name, source)
            return self.decode_ingress(endpoint_name, source)

        decoders = {
            ResourceKind.DEPLOYMENT: self.decode_deployment,
            ResourceKind.AUTOSCALER: self.decode_autoscaler,
            ResourceKind.SECRET: self.decode_secrets,
            ResourceKind.CONFIG_MAP: self.decode_config_maps,
            ResourceKind.VOLUME_CLAIM: self.decode_volume_claims,
        }
        return decoders[kind](source)

    def _decode_entries(
        self,
        kind: ResourceKind,
        source: ConfigSource,
        array_key: str,
        model_class: Type[ModelT],
        table: Dict[str, Setter],
    ) -> List[ModelT]:
        """Decode an outer block whose single key holds an array of entries."""
        models = []
        for key, value in iter_pairs(source):
            if key != array_key:
                raise ConfigError(f"Unknown {kind.value} configuration key: {key}")
            for entry in as_array(key, value):
                models.append(self._apply(kind, model_class(), entry, table))
        return models

    def _apply(
        self,
        kind: ResourceKind,
        model: ModelT,
        source: ConfigSource,
        table: Dict[str, Setter],
    ) -> ModelT:
        """Run every pair of a block through the kind's dispatch table."""
        for key, value in iter_pairs(source):
            setter = table.get(key)
            if setter is None:
                raise ConfigError(f"Unknown {kind.value} configuration key: {key}")
            try:
                setter(self, model, key, value)
            except ValidationError as e:
                message = e.errors()[0].get("msg", str(e))
                raise ConfigError(f"Invalid {kind.value} value for {key}: {message}") from e
        logger.debug(f"Decoded {kind.value} block")
        return model

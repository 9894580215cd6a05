"""Constants shared across artifact generation."""

KUBERNETES_SELECTOR_KEY = "app"

DEPLOYMENT_NAMESPACE_DEFAULT = "default"
DEPLOYMENT_IMAGE_PULL_POLICY_DEFAULT = "IfNotPresent"
DEFAULT_BASE_IMAGE = "ballerina/ballerina:latest"
CONTAINER_BALLERINA_HOME = "/ballerina/runtime"
BALLERINA_HOME_PLACEHOLDER = "${ballerina.home}"

DOCKER = "docker"
DOCKERFILE = "Dockerfile"
BALX = ".balx"
DOCKER_LATEST_TAG = ":latest"
DEFAULT_DEBUG_PORT = 5005

DEPLOYMENT_POSTFIX = "-deployment"
SVC_POSTFIX = "-svc"
INGRESS_POSTFIX = "-ingress"
HPA_POSTFIX = "-hpa"
INGRESS_HOSTNAME_POSTFIX = ".com"
VOLUME_POSTFIX = "-volume"

DEPLOYMENT_FILE_POSTFIX = "_deployment"
SVC_FILE_POSTFIX = "_svc"
SECRET_FILE_POSTFIX = "_secret"
CONFIG_MAP_FILE_POSTFIX = "_config_map"
VOLUME_CLAIM_FILE_POSTFIX = "_volume_claim"
INGRESS_FILE_POSTFIX = "_ingress"
HPA_FILE_POSTFIX = "_hpa"
YAML = ".yaml"

"""Constants for the ActiveMQ Artemis Operator."""

import os

# API Group
API_GROUP = "broker.amq.io"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_ACTIVEMQ_ARTEMIS = "ActiveMQArtemis"
PLURAL_ACTIVEMQ_ARTEMIS = "activemqartemises"

# Labels
LABEL_APPLICATION = "application"
LABEL_CR_NAME = KIND_ACTIVEMQ_ARTEMIS

# Field Manager
FIELD_MANAGER = "activemq-artemis-operator"
CONTROLLER_NAME = "activemq-artemis-operator"

# Name suffixes for resources derived from a custom resource
SUFFIX_STATEFULSET = "ss"
SUFFIX_HEADLESS_SERVICE = "hdls-svc"
SUFFIX_PING_SERVICE = "ping-svc"
SUFFIX_POD = "container"
SUFFIX_LABEL_APP = "app"
SUFFIX_USER_SECRET = "credentials-secret"
SUFFIX_CLUSTER_SECRET = "netty-secret"

# Kubernetes object names are DNS-1123 labels
MAX_NAME_LENGTH = 63

# Broker defaults
DEFAULT_BROKER_IMAGE = os.getenv(
    "DEFAULT_BROKER_IMAGE", "quay.io/artemiscloud/activemq-artemis-broker:latest"
)
BROKER_CONTAINER_NAME = "broker"
BROKER_DATA_DIR = "/opt/amq/data"
BROKER_DATA_VOLUME = "data"
DEFAULT_STORAGE_SIZE = "2Gi"

# Ports
PORT_CONSOLE_JOLOKIA = 8161
PORT_ALL_PROTOCOLS = 61616
PORT_PING = 8888

# Secret keys
SECRET_KEY_USER = "AMQ_USER"
SECRET_KEY_PASSWORD = "AMQ_PASSWORD"
SECRET_KEY_CLUSTER_USER = "AMQ_CLUSTER_USER"
SECRET_KEY_CLUSTER_PASSWORD = "AMQ_CLUSTER_PASSWORD"

# Reconcile loop
REQUEUE_DELAY_SECONDS = 5.0
DRIFT_CHECK_INTERVAL_SECONDS = int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "60"))

# Condition Types
COND_READY = "Ready"
COND_RESOURCES_CREATED = "ResourcesCreated"
COND_SCALING = "Scaling"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_RESOURCE_CREATED = "ResourceCreated"
EVENT_REASON_DRIFT_CORRECTED = "DriftCorrected"
EVENT_REASON_STATE_CHANGED = "StateChanged"

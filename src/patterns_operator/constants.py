"""Constants for the Patterns Operator."""

# API Group
API_GROUP = "gitops.hybrid-cloud-patterns.io"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_PATTERN = "Pattern"
KIND_SUBSCRIPTION = "Subscription"
KIND_APPLICATION = "Application"
PLURAL_PATTERNS = "patterns"

# Finalizers
FINALIZER = "foregroundDeletePattern"
ARGO_CASCADE_FINALIZER = "resources-finalizer.argocd.argoproj.io"

# Field Manager
CONTROLLER_NAME = "patterns-operator"

# OLM subscription for the GitOps engine
OLM_GROUP = "operators.coreos.com"
OLM_VERSION = "v1alpha1"
OLM_SUBSCRIPTION_PLURAL = "subscriptions"
SUBSCRIPTION_NAME = "openshift-gitops-operator"
SUBSCRIPTION_NAMESPACE = "openshift-operators"
SUBSCRIPTION_PACKAGE = "openshift-gitops-operator"
SUBSCRIPTION_SOURCE_NAMESPACE = "openshift-marketplace"

# Argo CD application
ARGO_GROUP = "argoproj.io"
ARGO_VERSION = "v1alpha1"
ARGO_APPLICATION_PLURAL = "applications"
APPLICATION_NAMESPACE = "openshift-gitops"
APPLICATION_PATH = "common/clustergroup"
APPLICATION_PROJECT = "default"
APPLICATION_DESTINATION_SERVER = "https://kubernetes.default.svc"
SYNC_STATUS_OUT_OF_SYNC = "OutOfSync"

# Cluster metadata
CONFIG_GROUP = "config.openshift.io"
CONFIG_VERSION = "v1"

# ACM hub
ACM_GROUP = "operator.open-cluster-management.io"
ACM_VERSION = "v1"
ACM_HUB_PLURAL = "multiclusterhubs"

# Labels
LABEL_PATTERN = "validatedpatterns.io/pattern"

# Spec defaults
DEFAULT_TARGET_REVISION = "main"
DEFAULT_OPERATOR_CHANNEL = "stable"
DEFAULT_OPERATOR_SOURCE = "redhat-operators"
DEFAULT_OPERATOR_CSV = "v1.4.0"
DEFAULT_CLUSTER_GROUP = "default"

# Reconcile steps, as reported in status.lastStep
STEP_UPDATE_FINALIZER = "updated finalizer"
STEP_FINALIZE = "finalize"
STEP_APPLY_DEFAULTS = "applying defaults"
STEP_PRE_VALIDATION = "prerequisite validation"
STEP_CREATE_SUBSCRIPTION = "create gitops subscription"
STEP_UPDATE_SUBSCRIPTION = "update gitops subscription"
STEP_CHECK_NAMESPACE = "check application namespace"
STEP_CREATE_APPLICATION = "create application"
STEP_UPDATE_APPLICATION = "updated application"
STEP_POST_VALIDATION = "validation"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_STEP_COMPLETED = "StepCompleted"
EVENT_REASON_FINALIZED = "Finalized"

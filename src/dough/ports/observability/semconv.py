"""dough observability semantic conventions.

Attribute keys, span names and metric names live here so instrumentation
stays consistent across adapters without importing the OpenTelemetry SDK.
"""

# Resource attributes
SERVICE_NAME = "service.name"
SERVICE_INSTANCE_ID = "service.instance.id"
DOUGH_RUNNER_ID = "dough.runner_id"
DOUGH_SCHEMA_VERSION = "dough.schema_version"

# Span names
SPAN_ALLOCATE = "dough.allocate"
SPAN_DISCOUNT = "dough.discount"
SPAN_SCALE = "dough.scale"

# Event names
EVT_REMAINDER_DISTRIBUTED = "dough.remainder.distributed"
EVT_WEIGHTS_DEFAULTED = "dough.weights.defaulted"

# Metric names
METRIC_ALLOCATIONS = "dough.allocations"
METRIC_REMAINDER_UNITS = "dough.remainder_units"
METRIC_INVALID_ARGUMENTS = "dough.invalid_arguments"
METRIC_INVARIANT_FAILURES = "dough.invariant_failures"

# Common attribute keys
ATTR_AMOUNT = "dough.amount"
ATTR_PARTIES = "dough.parties"
ATTR_REMAINDER = "dough.remainder"
ATTR_DISTRIBUTOR = "dough.distributor"
ATTR_PERCENTAGE = "dough.percentage"
ATTR_FACTOR = "dough.factor"
ATTR_AMOUNT_BITS = "dough.amount_bits"
ATTR_ERROR_TYPE = "error.type"

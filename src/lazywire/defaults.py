from lazywire.instance_mode import InstanceMode

DEFAULT_INSTANCE_MODE = InstanceMode.SHARED
"""Mode used by ``provide`` when no ``mode`` is given."""

ANONYMOUS_PROVIDER_NAME = "<anonymous>"
"""Display name for providers whose factory has no usable ``__name__``."""

LAMBDA_FUNCTION_NAME = "<lambda>"

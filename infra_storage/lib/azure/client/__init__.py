from .core import get_client_config, get_subscription_id

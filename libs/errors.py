"""
Error taxonomy shared by kafka-provider services.

Broker and network failures are raised by confluent_kafka itself and are
never wrapped here.
"""


class ConfigurationError(ValueError):
    """
    Required configuration is missing, empty or malformed.

    Raised during startup, before any producer handle exists. Callers should
    abort process initialization instead of retrying.
    """

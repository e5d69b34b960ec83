"""Management API transport."""

from rabbitmq_tools.broker.client import BrokerClient, BrokerConfig, build_path, encode_segment

__all__ = ["BrokerClient", "BrokerConfig", "build_path", "encode_segment"]

"""Kubernetes operator deploying ActiveMQ Artemis brokers."""

__version__ = "0.1.0"

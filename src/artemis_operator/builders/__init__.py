"""Builders for the cluster objects owned by an ActiveMQArtemis."""

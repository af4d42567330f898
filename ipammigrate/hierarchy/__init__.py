"""Subnet hierarchy reconstruction: creation order and parent discovery."""

from ipammigrate.hierarchy.forest import ContainmentForest, ForestNode
from ipammigrate.hierarchy.ordering import OrderingStrategy, order_subnets
from ipammigrate.hierarchy.resolver import MIN_PARENT_MASK, ParentResolver

__all__ = [
    "ContainmentForest",
    "ForestNode",
    "OrderingStrategy",
    "order_subnets",
    "ParentResolver",
    "MIN_PARENT_MASK",
]

"""
Planning Serializers.

Requests of the EOQ and MRP computations.
"""

from rest_framework import serializers

from .bom import BOMTreeSerializer


class EOQRequestSerializer(serializers.Serializer):
    """EOQ run: a saved tree and the final product's annual demand."""

    tree = BOMTreeSerializer()
    annual_demand = serializers.IntegerField()


class MRPRequestSerializer(serializers.Serializer):
    """
    MRP run: a saved tree and the final product's demand orders.

    Orders are kept raw (``{"offset", "demand"}``, integers or integer
    strings) and parsed by the domain, which reports a single format error.
    """

    tree = BOMTreeSerializer()
    orders = serializers.ListField(
        child=serializers.DictField(),
        allow_empty=False,
    )

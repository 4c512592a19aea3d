"""
Planning Views.

API views running EOQ and MRP over a saved BOM tree.

Results are cached per tree signature and demand input.
"""

import hashlib
import json
import logging

from django.conf import settings
from django.core.cache import cache
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from domain.bom.entities import BOMTreeNode
from domain.planning.entities import DemandSchedule
from domain.planning.eoq import compute_eoq, WORKING_DAYS_PER_YEAR
from domain.planning.mrp import MAX_PLANNING_PERIODS, compute_mrp
from ..serializers.planning import (
    EOQRequestSerializer,
    MRPRequestSerializer,
)

logger = logging.getLogger(__name__)


def planning_cache_key(kind: str, tree: BOMTreeNode, demand_input) -> str:
    demand_hash = hashlib.sha256(
        json.dumps(demand_input, sort_keys=True).encode('utf-8')
    ).hexdigest()[:16]
    return f"planning:{kind}:{tree.signature()}:{demand_hash}"


class PlanningViewSet(viewsets.ViewSet):
    """
    ViewSet for planning computations.

    Endpoints:
    - POST /planning/eoq/ - EOQ per component for an annual demand
    - POST /planning/mrp/ - MRP ledgers per component for a demand schedule
    """

    def _cache_timeout(self):
        return getattr(settings, 'PLANNING_CACHE_TIMEOUT', 900)

    def _max_periods(self):
        return getattr(settings, 'MAX_PLANNING_PERIODS', MAX_PLANNING_PERIODS)

    @action(detail=False, methods=['post'])
    def eoq(self, request):
        """Compute EOQ, orders per year and time between orders."""
        serializer = EOQRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tree = BOMTreeNode.from_dict(serializer.validated_data['tree'])
        annual_demand = serializer.validated_data['annual_demand']

        key = planning_cache_key('eoq', tree, annual_demand)
        payload = cache.get(key)
        if payload is None:
            rows = compute_eoq(tree, annual_demand)
            payload = {
                'bom': tree.component_name,
                'annual_demand': annual_demand,
                'working_days_per_year': WORKING_DAYS_PER_YEAR,
                'rows': [row.to_dict() for row in rows],
            }
            cache.set(key, payload, self._cache_timeout())
        else:
            logger.debug(f"EOQ cache hit for {tree.component_name}")

        return Response(payload)

    @action(detail=False, methods=['post'])
    def mrp(self, request):
        """Compute the MRP ledger of every component."""
        serializer = MRPRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tree = BOMTreeNode.from_dict(serializer.validated_data['tree'])
        schedule = DemandSchedule.parse(serializer.validated_data['orders'])

        key = planning_cache_key('mrp', tree, schedule.to_list())
        payload = cache.get(key)
        if payload is None:
            result = compute_mrp(tree, schedule, self._max_periods())
            payload = {
                'bom': tree.component_name,
                'orders': schedule.to_list(),
                'order_times': schedule.order_times(),
                **result.to_dict(),
            }
            cache.set(key, payload, self._cache_timeout())
        else:
            logger.debug(f"MRP cache hit for {tree.component_name}")

        return Response(payload)

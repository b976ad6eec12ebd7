"""Tests for pathfinding module."""

from swave_router.routing.graph import TokenGraph
from swave_router.routing.pathfinding import PathFinder
from tests.helpers import AQUA, DUST, UNIT, USDC, XLM, YXLM, make_pool, make_snapshot


def find(snapshot, source, target, amount):
    return PathFinder(TokenGraph.from_snapshot(snapshot)).find(source, target, amount)


class TestPathFinder:
    """Tests for PathFinder class."""

    def test_direct_path(self, chain_snapshot):
        result = find(chain_snapshot, XLM, USDC, 1_000 * UNIT)

        assert result.found
        assert result.path == [XLM, USDC]
        assert result.pool_ids == ["xlm-usdc"]
        assert result.cost == 40

    def test_two_hop_path(self, chain_snapshot):
        result = find(chain_snapshot, XLM, AQUA, 1_000 * UNIT)

        assert result.found
        assert result.path == [XLM, USDC, AQUA]
        assert result.cost == 80

    def test_same_token(self, chain_snapshot):
        result = find(chain_snapshot, XLM, XLM, UNIT)
        assert result.found
        assert result.edges == []
        assert result.path == [XLM]

    def test_no_path_between_components(self):
        snapshot = make_snapshot(
            make_pool("xlm-usdc", XLM, USDC, UNIT, UNIT),
            make_pool("aqua-yxlm", AQUA, YXLM, UNIT, UNIT),
        )
        result = find(snapshot, XLM, AQUA, 100)

        assert not result.found
        assert not result.blocked
        assert result.path == []

    def test_unknown_token_not_found(self, chain_snapshot):
        assert not find(chain_snapshot, XLM, "BTC", UNIT).found

    def test_prefers_cheaper_multihop_over_shallow_direct(self):
        """A direct pool this trade would swamp costs more than two deep hops."""
        snapshot = make_snapshot(
            # 1,000 XLM is 50% of this pool: 40 + 500 bps
            make_pool("xlm-aqua-shallow", XLM, AQUA, 2_000 * UNIT, 200_000 * UNIT),
            make_pool("xlm-usdc", XLM, USDC, 1_000_000 * UNIT, 100_000 * UNIT),
            make_pool("usdc-aqua", USDC, AQUA, 100_000 * UNIT, 10_000_000 * UNIT),
        )
        result = find(snapshot, XLM, AQUA, 1_000 * UNIT)

        assert result.path == [XLM, USDC, AQUA]
        assert result.cost == 80

    def test_small_trade_takes_direct_pool(self):
        snapshot = make_snapshot(
            make_pool("xlm-aqua-shallow", XLM, AQUA, 2_000 * UNIT, 200_000 * UNIT),
            make_pool("xlm-usdc", XLM, USDC, 1_000_000 * UNIT, 100_000 * UNIT),
            make_pool("usdc-aqua", USDC, AQUA, 100_000 * UNIT, 10_000_000 * UNIT),
        )
        result = find(snapshot, XLM, AQUA, 10 * UNIT)

        assert result.pool_ids == ["xlm-aqua-shallow"]
        assert result.cost == 40

    def test_later_hops_priced_at_flowing_amount(self):
        """The USDC hop sees ~100 USDC arriving, not the 1,000 XLM input.

        Priced at 1,000 the USDC-AQUA hop would be 50% of its depth and pay
        the 500 bps tier; at the flowing amount it stays below 5%.
        """
        snapshot = make_snapshot(
            make_pool("xlm-usdc", XLM, USDC, 1_000_000 * UNIT, 100_000 * UNIT),
            make_pool("usdc-aqua", USDC, AQUA, 2_000 * UNIT, 200_000 * UNIT),
        )
        result = find(snapshot, XLM, AQUA, 1_000 * UNIT)

        assert result.found
        assert result.cost == 80

    def test_parallel_pools_tie_broken_by_snapshot_order(self, multi_pool_snapshot):
        result = find(multi_pool_snapshot, XLM, USDC, 1_000 * UNIT)
        assert result.pool_ids == ["xlm-usdc-deep"]

    def test_collapsed_output_is_blocked(self):
        """Connected tokens whose only pool pays nothing are blocked, not disconnected."""
        snapshot = make_snapshot(make_pool("xlm-dust", XLM, DUST, 1_000_000 * UNIT, 1))
        result = find(snapshot, XLM, DUST, UNIT)

        assert not result.found
        assert result.blocked

    def test_deterministic(self, multi_pool_snapshot):
        results = [find(multi_pool_snapshot, XLM, USDC, 1_000 * UNIT) for _ in range(3)]
        assert all(r.pool_ids == results[0].pool_ids for r in results)

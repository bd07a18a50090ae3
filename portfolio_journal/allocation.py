from portfolio_journal.schemas import AllocationBucket, EnrichedHolding


def bucket_values(holdings: list[EnrichedHolding]) -> dict[str, float]:
    """Sum market value per industry, in order of first appearance."""
    buckets: dict[str, float] = {}
    for h in holdings:
        buckets[h.industry] = buckets.get(h.industry, 0.0) + h.market_value
    return buckets


def compute_allocation(holdings: list[EnrichedHolding], total_market_value: float) -> dict[str, float]:
    """Percentage of ``total_market_value`` held in each industry.

    Empty when the total is zero (or there are no holdings). Keys are ordered
    by descending percentage.
    """
    if not holdings or total_market_value == 0:
        return {}

    percentages = {
        industry: 100.0 * value / total_market_value
        for industry, value in bucket_values(holdings).items()
    }
    return dict(sorted(percentages.items(), key=lambda item: item[1], reverse=True))


def allocation_buckets(holdings: list[EnrichedHolding], total_market_value: float) -> list[AllocationBucket]:
    """Breakdown with bucket values attached, largest share first."""
    values = bucket_values(holdings)
    return [
        AllocationBucket(industry=industry, value=values[industry], percentage=percentage)
        for industry, percentage in compute_allocation(holdings, total_market_value).items()
    ]

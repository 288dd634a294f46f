import pytest

from conftest import make_call, won
from ops_dashboard.db.repositories.call_metric_repo import insert_call_metrics
from ops_dashboard.models.call_metric import CallMetricFilters
from ops_dashboard.services.call_metric_service import (
    agent_metrics,
    get_agents,
    get_summary,
    no_fit_breakdown,
    outcome_breakdown,
    price_disagreement_breakdown,
    summarize,
    wins_segmented,
)


class TestSummarize:
    def test_empty_set_is_all_zero(self):
        s = summarize([])
        assert s.total_calls == 0
        assert s.win_rate == 0
        assert s.avg_uplift_pct == 0
        assert s.sentiment_score == 0

    def test_seven_of_ten_won(self):
        calls = [won(final=1000, listed=900) for _ in range(7)]
        calls += [make_call(outcome_tag="no_agreement_price") for _ in range(2)]
        calls += [make_call(outcome_tag="no_fit_found")]

        s = summarize(calls)

        assert s.total_calls == 10
        assert s.win_rate == pytest.approx(0.7)
        assert s.pct_no_agreement_price == pytest.approx(0.2)
        assert s.pct_no_fit_found == pytest.approx(0.1)
        assert s.avg_listed == pytest.approx(900)
        assert s.avg_final == pytest.approx(1000)
        assert s.avg_uplift_pct == pytest.approx(0.1111, abs=1e-3)

    def test_outcome_rates_sum_to_one(self):
        calls = [
            won(),
            won(),
            make_call(outcome_tag="no_agreement_price"),
            make_call(outcome_tag="no_fit_found"),
            make_call(outcome_tag="no_fit_found"),
        ]
        s = summarize(calls)
        assert s.win_rate + s.pct_no_agreement_price + s.pct_no_fit_found == pytest.approx(1)

    def test_listed_average_uses_won_subset_only(self):
        calls = [won(final=1100, listed=1000), make_call(loadboard_rate=5000)]
        s = summarize(calls)
        assert s.avg_listed == pytest.approx(1000)
        assert s.avg_uplift_pct == pytest.approx(0.1)

    def test_no_wins_means_zero_uplift(self):
        s = summarize([make_call(), make_call(outcome_tag="no_agreement_price")])
        assert s.avg_listed == 0
        assert s.avg_uplift_pct == 0

    def test_sentiment_scaled_to_unit_range(self):
        calls = [
            make_call(sentiment_tag="very_positive"),
            make_call(sentiment_tag="very_positive"),
        ]
        assert summarize(calls).sentiment_score == pytest.approx(1.0)
        calls = [
            make_call(sentiment_tag="very_negative"),
            make_call(sentiment_tag="neutral"),
        ]
        assert summarize(calls).sentiment_score == pytest.approx(-0.5)

    def test_average_rounds(self):
        calls = [make_call(negotiation_rounds=n) for n in (1, 2, 3, 6)]
        assert summarize(calls).avg_negotiation_rounds == pytest.approx(3)


class TestBreakdowns:
    def test_outcome_breakdown_counts(self):
        calls = [won(), make_call(outcome_tag="no_agreement_price"), make_call()]
        b = outcome_breakdown(calls)
        assert (b.won_transferred, b.no_agreement_price, b.no_fit_found) == (1, 1, 1)
        assert b.total == 3

    def test_wins_split_at_ten_percent(self):
        calls = [
            won(final=1080, listed=1000),  # 8%
            won(final=1100, listed=1000),  # exactly 10%, still low
            won(final=1200, listed=1000),  # 20%
            won(final=950, listed=1000),  # below listed
            make_call(),
        ]
        w = wins_segmented(calls)
        assert w.low_uplift_wins == 3
        assert w.high_uplift_wins == 1
        assert w.total_wins == 4

    def test_price_gap_bands(self):
        def loss(rejected):
            return make_call(
                outcome_tag="no_agreement_price",
                loadboard_rate=1000,
                rejected_rate=rejected,
            )

        calls = [
            loss(1030), loss(1050), loss(1100), loss(1120), loss(1300),
            loss(None), won(),
        ]
        b = price_disagreement_breakdown(calls)
        assert b.small_gap == 2
        assert b.medium_gap == 1
        assert b.large_gap == 2
        assert b.unknown_gap == 1
        assert b.total == 6

    def test_no_fit_buckets(self):
        calls = [
            make_call(loads_offered=None),
            make_call(loads_offered=0),
            make_call(loads_offered=1),
            make_call(loads_offered=2),
            make_call(loads_offered=3),
            make_call(loads_offered=5),
            make_call(loads_offered=6),
            make_call(loads_offered=9),
            won(),
        ]
        b = no_fit_breakdown(calls)
        assert b.few_loads == 4
        assert b.multiple_loads == 2
        assert b.many_loads == 2
        assert b.total == 8

    def test_agent_metrics_sorted_by_name(self):
        calls = [
            won(agent_name="Pablo"),
            make_call(agent_name="Pablo"),
            won(agent_name="Katya"),
        ]
        metrics = agent_metrics(calls)
        assert [m.agent_name for m in metrics] == ["Katya", "Pablo"]
        assert metrics[0].win_rate == 1.0
        assert metrics[1].win_rate == 0.5
        assert metrics[1].total_calls == 2


class TestFilteredQueries:
    @pytest.fixture
    def seeded(self, db):
        insert_call_metrics([
            won(id="CM-1", timestamp_utc="2024-09-01T08:00:00.000Z", agent_name="Pablo"),
            make_call(id="CM-2", timestamp_utc="2024-09-02T08:00:00.000Z",
                      agent_name="Katya", equipment_type="reefer"),
            make_call(id="CM-3", timestamp_utc="2024-09-03T08:00:00.000Z",
                      agent_name="Pablo", outcome_tag="no_agreement_price"),
        ])

    def test_all_means_no_filter(self, seeded):
        filters = CallMetricFilters(agent_name="all", equipment_type="all")
        assert get_summary(filters).total_calls == 3

    def test_date_bounds_are_inclusive(self, seeded):
        filters = CallMetricFilters(
            start_date="2024-09-01T08:00:00.000Z",
            end_date="2024-09-02T08:00:00.000Z",
        )
        assert get_summary(filters).total_calls == 2

    def test_combined_filters(self, seeded):
        filters = CallMetricFilters(agent_name="Pablo", outcome_tag="won_transferred")
        s = get_summary(filters)
        assert s.total_calls == 1
        assert s.win_rate == 1.0

    def test_agents_sorted_and_distinct(self, seeded):
        assert get_agents() == ["Katya", "Pablo"]

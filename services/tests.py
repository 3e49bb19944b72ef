# ===== SERVICES LAYER TEST SUITE =====
"""
Test suite for services layer functionality
File: services/tests.py

Test Coverage:
- Portfolio statistics (averages, rounding, empty collections)
- Number formatting helpers
- Result count labels
"""

from django.test import TestCase

from properties.records import Property

from .business_logic import (
    PortfolioStats, calculate_portfolio_stats, describe_result_count,
    format_whole_number, round_half_up
)


def make_property(rent, area=None, **extra):
    return Property.from_dict({
        'id': str(rent),
        'image': 'https://example.com/p.jpg',
        'title': f'Listing {rent}',
        'address': '1 Test Street',
        'rent': rent,
        'area': area,
        'createdAt': '2024-06-10T16:00:00.000Z',
        **extra,
    })


# =============================================================================
# PORTFOLIO STATISTICS TESTS
# =============================================================================

class PortfolioStatsTest(TestCase):
    """Test portfolio statistics calculation"""

    def test_empty_portfolio(self):
        """Test an empty collection reports zeros"""
        stats = calculate_portfolio_stats([])

        self.assertEqual(stats, PortfolioStats(count=0, average_rent=0, average_area=0))
        self.assertEqual(stats.average_rent_display, '$0')
        self.assertEqual(stats.average_area_display, '0')

    def test_average_rent(self):
        stats = calculate_portfolio_stats([
            make_property(1500),
            make_property(2000),
            make_property(2000),
        ])

        self.assertEqual(stats.count, 3)
        self.assertEqual(stats.average_rent, 1833)
        self.assertEqual(stats.average_rent_display, '$1,833')

    def test_average_rent_rounds_half_up(self):
        """Test .5 averages round up, not to even"""
        stats = calculate_portfolio_stats([make_property(1000), make_property(1001)])
        self.assertEqual(stats.average_rent, 1001)

        stats = calculate_portfolio_stats([make_property(1000), make_property(1003)])
        self.assertEqual(stats.average_rent, 1002)

    def test_missing_area_counts_as_zero(self):
        """Test listings without an area still count toward the average"""
        stats = calculate_portfolio_stats([
            make_property(1000, area=1200),
            make_property(1100),
        ])

        self.assertEqual(stats.average_area, 600)

    def test_to_dict(self):
        stats = calculate_portfolio_stats([make_property(1200, area=800)])
        self.assertEqual(stats.to_dict(), {
            'count': 1,
            'average_rent': 1200,
            'average_area': 800,
        })


# =============================================================================
# FORMATTING HELPER TESTS
# =============================================================================

class FormattingHelperTest(TestCase):
    """Test number and label helpers"""

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)
        self.assertEqual(round_half_up(2.4), 2)
        self.assertEqual(round_half_up(0), 0)

    def test_format_whole_number(self):
        self.assertEqual(format_whole_number(1500), '1,500')
        self.assertEqual(format_whole_number(1234567), '1,234,567')
        self.assertEqual(format_whole_number(999), '999')

    def test_describe_result_count(self):
        self.assertEqual(describe_result_count(1), '1 property found')
        self.assertEqual(describe_result_count(0), '0 properties found')
        self.assertEqual(describe_result_count(3), '3 properties found')

"""Unit tests for briefing NOTAM categories."""
import pytest
from lido_briefing.categorize import (
    NotamCategory,
    bucket_active_notams,
    categorize_notam,
    is_skipped,
)
from lido_briefing.models.notam import ActiveResult
from lido_briefing.parser import parse_notam_block


class TestCategorize:
    """Test cases for keyword categorization."""

    def test_categorize_variants(self):
        test_cases = [
            ('ILS RWY 31L U/S', NotamCategory.ILS),
            ('GP RWY 13 NOT AVBL', NotamCategory.ILS),
            ('RNP APCH PROC SUSPENDED', NotamCategory.ILS),
            ('RWY 13R/31L CLSD', NotamCategory.RUNWAY),
            ('RUNWAY EDGE LIGHTS U/S', NotamCategory.RUNWAY),
            ('GPS RAIM OUTAGE', NotamCategory.OTHER),
            ('CRANE ERECTED 1NM N OF ARP', NotamCategory.OTHER),
        ]

        for text, expected in test_cases:
            assert categorize_notam(text) == expected, f"Failed for text: {text}"

    def test_alternate_approach_keywords(self):
        """Test alternates file LOC/GP records by their runway or as other."""
        test_cases = [
            ('ILS RWY 30R U/S', NotamCategory.ILS),
            ('APCH LGT RWY 12 U/S', NotamCategory.ILS),
            ('LOC RWY 12L U/S', NotamCategory.RUNWAY),
            ('GP OUT OF SERVICE', NotamCategory.OTHER),
        ]

        for text, expected in test_cases:
            assert categorize_notam(text, alternate=True) == expected, f"Failed for text: {text}"
        assert categorize_notam('GP OUT OF SERVICE') == NotamCategory.ILS

    def test_skip_laser(self):
        assert is_skipped('LASER DISPLAY WILL TAKE PLACE')
        assert is_skipped('lgt beam activity')
        assert not is_skipped('RWY 13 CLSD')


class TestBucketActiveNotams:
    """Test cases for bucket_active_notams."""

    @pytest.fixture
    def results(self):
        ils = parse_notam_block('OMAA', '1A001/25\nILS RWY 31L U/S')
        rwy = parse_notam_block('OMDB', '1A002/25\nRWY 12L CLSD')
        laser = parse_notam_block('OMAA', '1A003/25\nLASER DISPLAY')
        inactive = parse_notam_block('OMAA', '1A004/25\nTWY K CLSD')
        return [
            ActiveResult(record=ils, dest_active=True, altn_active={'OMDB': False}),
            ActiveResult(record=rwy, altn_active={'OMDB': True}),
            ActiveResult(record=laser, dest_active=True),
            ActiveResult(record=inactive, dest_active=False),
            ActiveResult(record=ils, dest_active=True),
        ]

    def test_buckets(self, results):
        buckets = bucket_active_notams(results)

        assert [r.id_raw for r in buckets['destination']['ils']] == ['1A001/25']
        assert [r.id_raw for r in buckets['alternate']['runway']] == ['1A002/25']
        assert buckets['destination']['other'] == []
        assert buckets['destination']['runway'] == []
        assert buckets['alternate']['ils'] == []

    def test_alternate_loc_not_in_ils_panel(self):
        loc = parse_notam_block('OMDB', '1A005/25\nLOC RWY 30L U/S')

        buckets = bucket_active_notams([
            ActiveResult(record=loc, dest_active=False, altn_active={'OMDB': True}),
        ])

        assert buckets['alternate']['ils'] == []
        assert [r.id_raw for r in buckets['alternate']['runway']] == ['1A005/25']

    def test_empty(self):
        buckets = bucket_active_notams([])

        assert set(buckets) == {'destination', 'alternate'}
        assert all(v == [] for cats in buckets.values() for v in cats.values())

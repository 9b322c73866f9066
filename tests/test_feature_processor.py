"""Tests for feature catalog generation (feature_processor.py)."""

import pytest

from acf_features.feature_processor import (
    BLOCK_SIZE,
    CHANNEL_COUNT,
    Feature,
    compute_max_feature_count,
    generate_features,
)


def _canonical_order(grid_width, grid_height, channel_count=CHANNEL_COUNT):
    return [
        (x, y, channel)
        for x in range(grid_width)
        for y in range(grid_height)
        for channel in range(channel_count)
    ]


class TestMaxFeatureCount:
    def test_square_window(self):
        assert compute_max_feature_count((32, 32)) == 8 * 8 * 10

    def test_partial_blocks_are_dropped(self):
        assert compute_max_feature_count((30, 17)) == 7 * 4 * 10

    def test_custom_block_and_channels(self):
        assert compute_max_feature_count((32, 16), block_size=8, channel_count=3) == 4 * 2 * 3


class TestGenerateFeatures:
    def test_32x32_yields_640_in_canonical_order(self):
        features = generate_features((32, 32), 1000)
        assert len(features) == 640
        assert [tuple(feature) for feature in features] == _canonical_order(8, 8)

    def test_entries_are_features(self):
        feature = generate_features((8, 8), 1)[0]
        assert isinstance(feature, Feature)
        assert (feature.x, feature.y, feature.channel) == (0, 0, 0)

    def test_prefix_of_canonical_order(self):
        features = generate_features((32, 32), 25)
        assert len(features) == 25
        assert features == generate_features((32, 32), 1000)[:25]
        # 25 = two full (x=0, y=0..1) cells plus five channels of the third
        assert features[-1] == Feature(0, 2, 4)

    def test_stops_mid_column(self):
        """The target count can land anywhere, including inside a y column."""
        features = generate_features((16, 16), 45)
        assert len(features) == 45
        assert features[-1] == Feature(1, 0, 4)

    def test_deterministic(self):
        assert generate_features((64, 128), 3000) == generate_features((64, 128), 3000)

    def test_bounded_by_count_and_grid(self):
        for window_size in [(4, 4), (16, 8), (30, 30), (64, 128)]:
            for count in [1, 7, 100, 10000]:
                features = generate_features(window_size, count)
                assert len(features) <= count
                assert len(features) <= compute_max_feature_count(window_size)
                assert len(features) == min(count, compute_max_feature_count(window_size))

    def test_no_duplicates(self):
        features = generate_features((24, 20), 10000)
        assert len(set(features)) == len(features)

    def test_coordinates_within_grid(self):
        features = generate_features((20, 12), 10000)
        assert max(feature.x for feature in features) == 20 // BLOCK_SIZE - 1
        assert max(feature.y for feature in features) == 12 // BLOCK_SIZE - 1
        assert {feature.channel for feature in features} == set(range(CHANNEL_COUNT))

    def test_window_smaller_than_block(self):
        assert generate_features((3, 3), 10) == []

    def test_custom_channel_count(self):
        features = generate_features((8, 4), 100, channel_count=8)
        assert len(features) == 2 * 1 * 8
        assert max(feature.channel for feature in features) == 7

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count_raises(self, count):
        with pytest.raises(ValueError, match="positive"):
            generate_features((32, 32), count)

    def test_non_positive_window_raises(self):
        with pytest.raises(ValueError, match="Window size"):
            generate_features((0, 32), 10)

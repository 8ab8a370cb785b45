"""
Tests for the outcome -> rating encoder and the binary outcome.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from bechdel.models import OUTCOMES
from bechdel.ratings import (
	UnknownOutcomeError, rating_for, binary_for, encode_ratings, derive_binary, check_binary,
)


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def test_rating_table():
	expected = {'dubious': -1, 'nowomen': 0, 'notalk': 1, 'men': 2, 'ok': 3}
	for label, rating in expected.items():
		assert_equal(rating_for(label), rating, f"rating for {label}")
	assert_equal(len({rating_for(label) for label in OUTCOMES}), 5, "one distinct rating per label")


def test_binary_for_every_label():
	for label in ('nowomen', 'notalk', 'men', 'dubious'):
		assert_equal(binary_for(label), 'FAIL', f"{label} fails")
	assert_equal(binary_for('ok'), 'PASS', "ok passes")


def test_unknown_label_rejected():
	with pytest.raises(UnknownOutcomeError):
		rating_for('maybe')
	with pytest.raises(UnknownOutcomeError):
		binary_for('OK')  # labels are case-sensitive
	with pytest.raises(ValueError):
		encode_ratings(pd.DataFrame({'clean_test': ['ok', 'maybe']}))


def test_encode_ratings_columns():
	frame = pd.DataFrame({'clean_test': ['ok', 'nowomen', 'dubious', 'men']})
	encoded = encode_ratings(frame)
	assert_equal(encoded['rating'].tolist(), [3, 0, -1, 2], "ordinal ratings")
	assert_equal([str(v) for v in encoded['level']], ['3', '0', '-1', '2'], "level is the stringified rating")
	assert_equal('rating' in frame.columns, False, "input left untouched")


def test_encode_ratings_is_stable():
	frame = pd.DataFrame({'clean_test': list(OUTCOMES)})
	once = encode_ratings(frame)
	twice = encode_ratings(once)
	pd.testing.assert_frame_equal(once, twice)


def test_tag_unknown_labels():
	frame = pd.DataFrame({'clean_test': ['ok', 'maybe']})
	encoded = encode_ratings(frame, on_unknown='tag')
	assert_equal(encoded['rating'].iloc[0], 3, "known label encoded")
	assert_equal(pd.isna(encoded['rating'].iloc[1]), True, "unknown label has no rating")
	assert_equal(encoded['level'].iloc[1], 'unknown', "unknown label tagged")


def test_invalid_policy():
	with pytest.raises(ValueError):
		encode_ratings(pd.DataFrame({'clean_test': ['ok']}), on_unknown='ignore')


def test_derive_binary():
	frame = pd.DataFrame({'clean_test': ['nowomen', 'notalk', 'men', 'dubious', 'ok']})
	derived = derive_binary(frame)
	assert_equal(derived['binary'].tolist(), ['FAIL', 'FAIL', 'FAIL', 'FAIL', 'PASS'], "binary from label")


def test_check_binary_rejects_inconsistent_rows():
	frame = pd.DataFrame({'clean_test': ['ok', 'dubious'], 'binary': ['PASS', 'PASS']})
	with pytest.raises(ValueError):
		check_binary(frame)
	with pytest.raises(ValueError):
		derive_binary(frame)
	check_binary(pd.DataFrame({'clean_test': ['ok', 'dubious'], 'binary': ['PASS', 'FAIL']}))


def main():
	print("Running ratings tests...")
	test_rating_table()
	test_binary_for_every_label()
	test_unknown_label_rejected()
	test_encode_ratings_columns()
	test_encode_ratings_is_stable()
	test_tag_unknown_labels()
	test_invalid_policy()
	test_derive_binary()
	test_check_binary_rejects_inconsistent_rows()
	print("All ratings tests passed!")


if __name__ == '__main__':
	main()

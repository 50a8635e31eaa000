"""
Tests for the three-way list diff.
"""

from storageman.diff import three_way_diff


class TestThreeWayDiff:

    def test_splits_new_matched_missing(self):
        diff = three_way_diff(submitted=[1, 2, 4], existing=[1, 2, 3])

        assert diff.new == [4]
        assert diff.matched == [1, 2]
        assert diff.missing == [3]
        assert diff.has_changes

    def test_same_sets_have_no_changes(self):
        diff = three_way_diff(submitted=[2, 1], existing=[1, 2])

        assert diff.matched == [2, 1]
        assert not diff.has_changes

    def test_duplicates_collapse(self):
        diff = three_way_diff(submitted=[5, 5, 6], existing=[])

        assert diff.new == [5, 6]

    def test_empty_submission_removes_everything(self):
        diff = three_way_diff(submitted=[], existing=[1, 2])

        assert diff.missing == [1, 2]

    def test_key_function(self):
        """Items are matched by key; new/matched keep submitted items."""
        submitted = [{'id': 1, 'name': 'Fruit'}, {'id': None, 'name': 'Veg'}]
        existing = [{'id': 1, 'name': 'Fruits'}, {'id': 2, 'name': 'Nuts'}]

        diff = three_way_diff(submitted, existing, key=lambda item: item['id'])

        assert diff.matched == [{'id': 1, 'name': 'Fruit'}]
        assert diff.new == [{'id': None, 'name': 'Veg'}]
        assert diff.missing == [{'id': 2, 'name': 'Nuts'}]

from __future__ import annotations

import random
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hrdraw.config import Settings
from hrdraw.entities import Participant
from hrdraw.errors import InvalidGroupSize
from hrdraw.grouping import GroupingEngine, clamp_group_size, partition_into_groups
from hrdraw.models import Base
from hrdraw.roster import RosterManager
from hrdraw.shuffle import chunked, random_index, shuffled


def _people(n: int) -> list[Participant]:
    return [Participant(id=f"p{i}", name=f"Person {i}") for i in range(n)]


class ShufflePrimitiveTests(unittest.TestCase):
    def test_random_index_bounds(self) -> None:
        for n in (1, 2, 7):
            for _ in range(50):
                self.assertIn(random_index(n), range(n))
        with self.assertRaises(ValueError):
            random_index(0)

    def test_shuffled_is_a_permutation_and_leaves_input_alone(self) -> None:
        items = list(range(20))
        result = shuffled(items, random.Random(3))
        self.assertEqual(items, list(range(20)))
        self.assertEqual(sorted(result), items)

    def test_shuffled_is_roughly_uniform(self) -> None:
        rng = random.Random(12345)
        counts: dict[tuple, int] = {}
        trials = 6000
        for _ in range(trials):
            key = tuple(shuffled("abc", rng))
            counts[key] = counts.get(key, 0) + 1
        self.assertEqual(len(counts), 6)
        for count in counts.values():
            # Each of the 6 permutations expects 1000; allow a wide margin.
            self.assertGreater(count, 850)
            self.assertLess(count, 1150)

    def test_chunked(self) -> None:
        self.assertEqual(chunked([1, 2, 3, 4, 5], 2), [[1, 2], [3, 4], [5]])
        self.assertEqual(chunked([], 3), [])
        with self.assertRaises(ValueError):
            chunked([1], 0)


class PartitionIntoGroupsTests(unittest.TestCase):
    def test_ten_by_four(self) -> None:
        people = _people(10)
        groups = partition_into_groups(people, 4)
        self.assertEqual([len(g) for g in groups], [4, 4, 2])
        self.assertEqual([g.id for g in groups], [1, 2, 3])
        ids = [m.id for g in groups for m in g.members]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(set(ids), {p.id for p in people})

    def test_nine_by_three(self) -> None:
        groups = partition_into_groups(_people(9), 3)
        self.assertEqual([len(g) for g in groups], [3, 3, 3])

    def test_size_larger_than_roster(self) -> None:
        groups = partition_into_groups(_people(3), 5)
        self.assertEqual([len(g) for g in groups], [3])

    def test_empty_roster(self) -> None:
        self.assertEqual(partition_into_groups([], 3), [])

    def test_invalid_sizes_raise(self) -> None:
        for size in (0, -2, 2.5, "3", None, True):
            with self.subTest(size=size):
                with self.assertRaises(InvalidGroupSize):
                    partition_into_groups(_people(4), size)  # type: ignore[arg-type]

    def test_repeated_calls_differ(self) -> None:
        people = _people(10)
        orderings = {
            tuple(m.id for g in partition_into_groups(people, 4) for m in g.members)
            for _ in range(20)
        }
        self.assertGreater(len(orderings), 1)

    def test_input_order_is_not_kept(self) -> None:
        people = _people(12)
        groups = partition_into_groups(people, 12, random.Random(7))
        self.assertEqual(len(groups), 1)
        self.assertNotEqual(list(groups[0].members), people)


class ClampGroupSizeTests(unittest.TestCase):
    def test_clamps(self) -> None:
        self.assertEqual(clamp_group_size(4, 10), 4)
        self.assertEqual(clamp_group_size("4", 10), 4)
        self.assertEqual(clamp_group_size(" 3 people", 10), 3)
        self.assertEqual(clamp_group_size(0, 10), 1)
        self.assertEqual(clamp_group_size("-3", 10), 1)
        self.assertEqual(clamp_group_size("abc", 10), 1)
        self.assertEqual(clamp_group_size(None, 10), 1)
        self.assertEqual(clamp_group_size(50, 10), 10)
        self.assertEqual(clamp_group_size(5, 0), 1)


class GroupingEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )
        self.session = self.Session()
        self.roster = RosterManager(self.session, settings=Settings())
        self.grouping = GroupingEngine(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def test_generate_stores_grouping(self) -> None:
        people = self.roster.ingest_text(",".join(f"P{i}" for i in range(10)))
        groups = self.grouping.generate(4)
        self.assertEqual([len(g) for g in groups], [4, 4, 2])
        self.assertEqual(self.grouping.groups(), groups)
        stored_ids = {m.id for g in self.grouping.groups() for m in g.members}
        self.assertEqual(stored_ids, {p.id for p in people})

    def test_regenerate_replaces_previous_grouping(self) -> None:
        self.roster.ingest_text(",".join(f"P{i}" for i in range(9)))
        self.grouping.generate(3)
        second = self.grouping.generate(2)
        self.assertEqual(self.grouping.groups(), second)
        self.assertEqual([len(g) for g in second], [2, 2, 2, 2, 1])

    def test_roster_change_discards_grouping(self) -> None:
        self.roster.ingest_text("A,B,C,D")
        self.grouping.generate(2)
        self.roster.ingest_text("E")
        self.assertEqual(self.grouping.groups(), [])

    def test_generate_rejects_invalid_size(self) -> None:
        self.roster.ingest_text("A,B")
        with self.assertRaises(InvalidGroupSize):
            self.grouping.generate(0)

    def test_empty_roster_gives_no_groups(self) -> None:
        self.assertEqual(self.grouping.generate(3), [])
        self.assertEqual(self.grouping.clear(), 0)

    def test_seeded_engine_is_reproducible(self) -> None:
        self.roster.ingest_text("A,B,C,D,E")
        first = GroupingEngine(self.session, rng=random.Random(1)).generate(2)
        second = GroupingEngine(self.session, rng=random.Random(1)).generate(2)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()

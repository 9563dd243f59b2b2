import unittest
from unittest.mock import patch

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker

from hrdraw.db.engine import make_engine, open_session
from hrdraw.entities import Participant
from hrdraw.models import Base, RosterEntry, WinRecord, generate_participant_id
from hrdraw.models.utils import BASE62_ALPHABET, PARTICIPANT_ID_LENGTH


class DBTestCase(unittest.TestCase):
    def setUp(self):
        # In-memory SQLite for isolation
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self):
        self.engine.dispose()

    def test_generated_ids_are_base62_and_distinct(self):
        ids = {generate_participant_id() for _ in range(500)}
        self.assertEqual(len(ids), 500)
        for value in ids:
            self.assertEqual(len(value), PARTICIPANT_ID_LENGTH)
            self.assertTrue(set(value) <= set(BASE62_ALPHABET))

    def test_id_generation_retries_on_collision(self):
        with self.Session() as session:
            session.add(RosterEntry(id="A" * 4, name="Ann", position=0))
            session.flush()
            # First candidate collides with the stored entry, second is free.
            with patch(
                "hrdraw.models.utils.secrets.choice",
                side_effect=list("AAAA") + list("BBBB"),
            ):
                self.assertEqual(generate_participant_id(session, length=4), "BBBB")

    def test_id_generation_gives_up(self):
        with self.Session() as session:
            session.add(RosterEntry(id="AA", name="Ann", position=0))
            with patch("hrdraw.models.utils.secrets.choice", return_value="A"):
                with self.assertRaises(RuntimeError):
                    generate_participant_id(session, length=2, max_attempts=3)

    def test_invalid_length(self):
        with self.assertRaises(ValueError):
            generate_participant_id(length=0)

    def test_roster_entry_requires_name(self):
        with self.assertRaises(ValueError):
            RosterEntry(id="x", name="  ", position=0)

    def test_next_position(self):
        with self.Session() as session:
            self.assertEqual(RosterEntry.next_position(session), 0)
            session.add(RosterEntry(id="x", name="Ann", position=4))
            session.flush()
            self.assertEqual(RosterEntry.next_position(session), 5)

    def test_win_record_sequence_restarts_after_clear(self):
        with self.Session() as session:
            WinRecord.record(session, Participant("a", "Ann"))
            WinRecord.record(session, Participant("b", "Bob"))
            self.assertEqual(WinRecord.clear(session), 2)
            record = WinRecord.record(session, Participant("c", "Cid"))
            self.assertEqual(record.sequence, 1)
            self.assertEqual(record.to_participant(), Participant("c", "Cid"))


class SessionStoreTests(unittest.TestCase):
    def test_open_session_creates_schema_in_memory(self):
        session = open_session("sqlite+pysqlite:///:memory:")
        try:
            tables = set(inspect(session.get_bind()).get_table_names())
            self.assertEqual(tables, {"roster_entries", "win_records", "group_members"})
            session.add(RosterEntry(id="x", name="Ann", position=0))
            session.commit()
            # StaticPool keeps the same in-memory database across checkouts.
            self.assertEqual(len(RosterEntry.ordered(session)), 1)
        finally:
            bind = session.get_bind()
            session.close()
            bind.dispose()

    def test_make_engine_uses_settings_default(self):
        with patch.dict("os.environ", {}, clear=True), patch("hrdraw.config.load_dotenv"):
            engine = make_engine()
        try:
            self.assertEqual(str(engine.url), "sqlite+pysqlite:///:memory:")
        finally:
            engine.dispose()


if __name__ == "__main__":
    unittest.main()

"""
TechNotes Backend — Note Service Unit Tests
=============================================

What:  Tests for NoteService business rules (list, create, update, delete).
How:   Runs against in-memory fake stores (no database).

What we test:
    ✅ Missing / malformed fields raise ValidationError
    ✅ Case- and accent-insensitive duplicate titles raise ConflictError
    ✅ A note may keep its own title on update
    ✅ Unknown ids raise NotFoundError and leave the store untouched
    ✅ Listing attaches usernames in note order, None for missing owners
"""

from uuid import uuid4

import pytest

from technotes.exceptions import ConflictError, NotFoundError, ValidationError


class TestListNotes:
    """Tests for list_notes."""

    @pytest.mark.asyncio
    async def test_empty_store_raises_not_found(self, note_service):
        with pytest.raises(NotFoundError, match="No notes found"):
            await note_service.list_notes()

    @pytest.mark.asyncio
    async def test_attaches_usernames_in_note_order(self, note_service, note_store, user_store):
        alice = user_store.add("alice")
        bob = user_store.add("bob")
        first = note_store.add(alice.id, "Fix printer")
        second = note_store.add(bob.id, "Order toner")
        third = note_store.add(alice.id, "Call vendor")

        views = await note_service.list_notes()

        assert [v.id for v in views] == [first.id, second.id, third.id]
        assert [v.username for v in views] == ["alice", "bob", "alice"]
        assert views[1].user == bob.id
        assert views[1].title == "Order toner"
        assert views[1].completed is False

    @pytest.mark.asyncio
    async def test_owners_resolved_in_one_lookup(self, note_service, note_store, user_store):
        alice = user_store.add("alice")
        for i in range(5):
            note_store.add(alice.id, f"Note {i}")

        await note_service.list_notes()

        assert user_store.lookups == 1

    @pytest.mark.asyncio
    async def test_missing_owner_yields_null_username(self, note_service, note_store):
        note_store.add(uuid4(), "Orphan")

        views = await note_service.list_notes()

        assert views[0].title == "Orphan"
        assert views[0].username is None


class TestCreateNote:
    """Tests for create_note."""

    @pytest.mark.asyncio
    async def test_creates_note(self, note_service, note_store, user_store):
        alice = user_store.add("alice")

        result = await note_service.create_note(user=str(alice.id), title="Shopping", text="milk")

        assert result.message == "New note created"
        (note,) = note_store.rows.values()
        assert note.title == "Shopping"
        assert note.text == "milk"
        assert note.completed is False
        assert note.user_id == alice.id

    @pytest.mark.asyncio
    async def test_created_note_is_listed_with_username(self, note_service, user_store):
        alice = user_store.add("alice")
        await note_service.create_note(user=str(alice.id), title="Shopping", text="milk")

        views = await note_service.list_notes()

        assert views[0].title == "Shopping"
        assert views[0].username == "alice"

    @pytest.mark.parametrize(
        "user,title,text",
        [
            (None, "Title", "Text"),
            ("u", None, "Text"),
            ("u", "Title", None),
            ("", "Title", "Text"),
            ("u", "", "Text"),
            ("u", "Title", ""),
        ],
    )
    @pytest.mark.asyncio
    async def test_missing_fields_rejected(self, note_service, note_store, user, title, text):
        with pytest.raises(ValidationError, match="All fields are required"):
            await note_service.create_note(user=user, title=title, text=text)
        assert note_store.rows == {}

    @pytest.mark.parametrize("title", ["GROCERIES", "groceries", "Gröceries", "GRÖCERIES"])
    @pytest.mark.asyncio
    async def test_duplicate_title_conflicts(self, note_service, note_store, title):
        note_store.add(uuid4(), "Groceries")

        with pytest.raises(ConflictError, match="Duplicate note title"):
            await note_service.create_note(user=str(uuid4()), title=title, text="eggs")
        assert len(note_store.rows) == 1

    @pytest.mark.asyncio
    async def test_todo_then_upper_todo_conflicts(self, note_service):
        owner = str(uuid4())
        await note_service.create_note(user=owner, title="Todo", text="a")

        with pytest.raises(ConflictError):
            await note_service.create_note(user=owner, title="TODO", text="b")

    @pytest.mark.asyncio
    async def test_distinct_title_allowed(self, note_service, note_store):
        note_store.add(uuid4(), "Todo")

        await note_service.create_note(user=str(uuid4()), title="Todos", text="b")

        assert len(note_store.rows) == 2

    @pytest.mark.asyncio
    async def test_malformed_user_id_rejected(self, note_service, note_store):
        with pytest.raises(ValidationError, match="Invalid note data received"):
            await note_service.create_note(user="not-an-id", title="Title", text="Text")
        assert note_store.rows == {}

    @pytest.mark.asyncio
    async def test_store_returning_nothing_reports_invalid_data(self, note_service, note_store):
        note_store.create_returns_none = True

        with pytest.raises(ValidationError, match="Invalid note data received"):
            await note_service.create_note(user=str(uuid4()), title="Title", text="Text")


class TestUpdateNote:
    """Tests for update_note."""

    @pytest.mark.asyncio
    async def test_overwrites_all_fields(self, note_service, note_store):
        note = note_store.add(uuid4(), "Draft", text="old")
        new_owner = uuid4()

        result = await note_service.update_note(
            id=str(note.id), user=str(new_owner), title="Final", text="new", completed=True
        )

        assert result.message == '"Final" updated'
        stored = note_store.rows[note.id]
        assert stored.user_id == new_owner
        assert stored.title == "Final"
        assert stored.text == "new"
        assert stored.completed is True
        assert note_store.saves == 1

    @pytest.mark.asyncio
    async def test_keeping_own_title_is_not_a_conflict(self, note_service, note_store):
        note = note_store.add(uuid4(), "Groceries")

        result = await note_service.update_note(
            id=str(note.id), user=str(note.user_id), title="Groceries", text="x", completed=False
        )

        assert result.message == '"Groceries" updated'

    @pytest.mark.asyncio
    async def test_recasing_own_title_is_not_a_conflict(self, note_service, note_store):
        note = note_store.add(uuid4(), "Groceries")

        await note_service.update_note(
            id=str(note.id), user=str(note.user_id), title="GROCERIES", text="x", completed=False
        )

        assert note_store.rows[note.id].title == "GROCERIES"

    @pytest.mark.asyncio
    async def test_taking_another_notes_title_conflicts(self, note_service, note_store):
        note_store.add(uuid4(), "Groceries")
        note = note_store.add(uuid4(), "Errands")

        with pytest.raises(ConflictError):
            await note_service.update_note(
                id=str(note.id), user=str(note.user_id), title="gröceries", text="x", completed=False
            )
        assert note_store.rows[note.id].title == "Errands"
        assert note_store.saves == 0

    @pytest.mark.asyncio
    async def test_same_completed_twice_is_idempotent(self, note_service, note_store):
        note = note_store.add(uuid4(), "Ship it")
        fields = dict(id=str(note.id), user=str(note.user_id), title="Ship it", text="t", completed=True)

        await note_service.update_note(**fields)
        first = (note.user_id, note.title, note.text, note.completed)
        await note_service.update_note(**fields)
        second = (note.user_id, note.title, note.text, note.completed)

        assert first == second
        assert note.completed is True

    @pytest.mark.parametrize("completed", [None, "true", 1, 0, "false"])
    @pytest.mark.asyncio
    async def test_non_boolean_completed_rejected(self, note_service, note_store, completed):
        note = note_store.add(uuid4(), "Ship it")

        with pytest.raises(ValidationError, match="All fields are required"):
            await note_service.update_note(
                id=str(note.id), user=str(note.user_id), title="Ship it", text="t", completed=completed
            )

    @pytest.mark.asyncio
    async def test_false_completed_is_accepted(self, note_service, note_store):
        note = note_store.add(uuid4(), "Ship it", completed=True)

        await note_service.update_note(
            id=str(note.id), user=str(note.user_id), title="Ship it", text="t", completed=False
        )

        assert note.completed is False

    @pytest.mark.asyncio
    async def test_missing_id_rejected(self, note_service):
        with pytest.raises(ValidationError):
            await note_service.update_note(id=None, user="u", title="t", text="x", completed=True)

    @pytest.mark.asyncio
    async def test_unknown_id_not_found(self, note_service):
        with pytest.raises(NotFoundError, match="Note not found"):
            await note_service.update_note(
                id=str(uuid4()), user=str(uuid4()), title="t", text="x", completed=True
            )

    @pytest.mark.asyncio
    async def test_malformed_id_not_found(self, note_service):
        with pytest.raises(NotFoundError, match="Note not found"):
            await note_service.update_note(
                id="abc123", user=str(uuid4()), title="t", text="x", completed=True
            )

    @pytest.mark.asyncio
    async def test_deleted_note_not_found(self, note_service, note_store):
        note = note_store.add(uuid4(), "Gone soon")
        await note_service.delete_note(id=str(note.id))

        with pytest.raises(NotFoundError, match="Note not found"):
            await note_service.update_note(
                id=str(note.id), user=str(note.user_id), title="Back", text="x", completed=False
            )


class TestDeleteNote:
    """Tests for delete_note."""

    @pytest.mark.asyncio
    async def test_deletes_and_confirms(self, note_service, note_store):
        note = note_store.add(uuid4(), "Shopping")

        reply = await note_service.delete_note(id=str(note.id))

        assert reply == f'Note titled "Shopping" with ID {note.id} deleted'
        assert note.id not in note_store.rows

    @pytest.mark.asyncio
    async def test_missing_id_rejected(self, note_service):
        with pytest.raises(ValidationError, match="Note ID required"):
            await note_service.delete_note(id="")

    @pytest.mark.asyncio
    async def test_unknown_id_leaves_store_untouched(self, note_service, note_store):
        keep = note_store.add(uuid4(), "Keep me")

        with pytest.raises(NotFoundError, match="Note not found"):
            await note_service.delete_note(id=str(uuid4()))
        assert list(note_store.rows) == [keep.id]

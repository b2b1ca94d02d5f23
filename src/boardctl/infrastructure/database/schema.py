"""SQLAlchemy Core table definitions for the boardctl database.

``position`` is deliberately not unique per container: a range shift
passes through transient duplicates while its UPDATE runs.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text

metadata = MetaData()

workspaces = Table(
    "workspaces",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("created", Text, nullable=False),
)

boards = Table(
    "boards",
    metadata,
    Column("id", Text, primary_key=True),
    Column("workspace_id", Text, ForeignKey("workspaces.id"), nullable=False),
    Column("name", Text, nullable=False),
    Column("created", Text, nullable=False),
)

lists = Table(
    "lists",
    metadata,
    Column("id", Text, primary_key=True),
    Column("board_id", Text, ForeignKey("boards.id"), nullable=False),
    Column("workspace_id", Text, ForeignKey("workspaces.id"), nullable=False),
    Column("name", Text, nullable=False),
    Column("description", Text),
    Column("position", Integer, nullable=False, default=0, server_default="0"),
    Column("version", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

cards = Table(
    "cards",
    metadata,
    Column("id", Text, primary_key=True),
    Column("list_id", Text, ForeignKey("lists.id"), nullable=False),
    Column("board_id", Text, ForeignKey("boards.id"), nullable=False),
    Column("workspace_id", Text, ForeignKey("workspaces.id"), nullable=False),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("position", Integer, nullable=False, default=0, server_default="0"),
    Column("version", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for container scans
# ---------------------------------------------------------------------------

Index("ix_boards_workspace", boards.c.workspace_id)
Index("ix_lists_board_position", lists.c.board_id, lists.c.position)
Index("ix_cards_list_position", cards.c.list_id, cards.c.position)

"""SQLAlchemy table definitions for UBOS.

These table definitions are used with SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ORGANIZATIONS TABLE
# ============================================================================
organizations_table = Table(
    "organizations",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(254), nullable=False),
    Column("first_name", String(255), nullable=False),
    Column("last_name", String(255), nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

# Email is unique system-wide, compared case-insensitively
Index("uq_users_email", func.lower(users_table.c.email), unique=True)

# ============================================================================
# USER CREDENTIALS TABLE (password hashes, kept apart from profile data)
# ============================================================================
user_credentials_table = Table(
    "user_credentials",
    metadata,
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("password_hash", Text, nullable=False),  # Argon2id encoded hash
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

# ============================================================================
# ROLES TABLE (organization-scoped)
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(100), nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint("organization_id", "name", name="uq_roles_organization_name"),
)

Index("idx_roles_organization_id", roles_table.c.organization_id)

# ============================================================================
# USER ROLES TABLE (role bindings)
# ============================================================================
user_roles_table = Table(
    "user_roles",
    metadata,
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("role_id", UUID, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "assigned_by_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "assigned_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint(
        "user_id", "role_id", "organization_id", name="uq_user_roles_binding"
    ),
)

Index(
    "idx_user_roles_user_organization",
    user_roles_table.c.user_id,
    user_roles_table.c.organization_id,
)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("email", String(254), nullable=False),  # Stored as supplied
    Column("role_id", UUID, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
    Column("token", String(255), nullable=False),  # URL-safe bearer token
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "expired",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "invited_by_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "accepted_by_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint("token", name="uq_invitations_token"),
)

Index(
    "idx_invitations_organization_status",
    invitations_table.c.organization_id,
    invitations_table.c.status,
)
Index("idx_invitations_created_at", invitations_table.c.created_at.desc())

# Only one pending invitation per organization/email (case-insensitive)
Index(
    "uq_invitations_pending_email",
    invitations_table.c.organization_id,
    func.lower(invitations_table.c.email),
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)

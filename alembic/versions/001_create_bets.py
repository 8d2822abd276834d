"""001: create bets table and updated_at trigger function

Revision ID: 001
Revises:
Create Date: 2025-09-08
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    # amount_per_person / odds are nullable: rows imported from the old document
    # store can be partial, and settlement skips them with a warning.
    op.execute("""
        CREATE TABLE bets (
            id                  VARCHAR(64)     PRIMARY KEY,
            weekend_id          VARCHAR(32)     NOT NULL,
            game_id             VARCHAR(128),
            status              VARCHAR(16)     NOT NULL DEFAULT 'active',
            betting_mode        VARCHAR(16)     NOT NULL DEFAULT 'group',
            bet_type            VARCHAR(16)     NOT NULL DEFAULT 'moneyline',
            placed_by           VARCHAR(64),
            participants        TEXT[]          NOT NULL DEFAULT '{}',
            side_a              TEXT[],
            side_b              TEXT[],
            amount_per_person   NUMERIC(12, 2),
            total_amount        NUMERIC(12, 2),
            odds                INT,
            selection           TEXT            NOT NULL DEFAULT '',
            line                NUMERIC(6, 1),
            parlay_leg_odds     INT[],
            result              TEXT,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            resolved_at         TIMESTAMPTZ,
            CONSTRAINT ck_bets_status CHECK (
                status IN ('active', 'won', 'lost', 'cancelled', 'unknown')
            ),
            CONSTRAINT ck_bets_betting_mode CHECK (
                betting_mode IN ('group', 'head_to_head', 'parlay')
            ),
            CONSTRAINT ck_bets_bet_type CHECK (
                bet_type IN ('spread', 'over_under', 'moneyline', 'player_prop', 'parlay')
            ),
            CONSTRAINT ck_bets_weekend_id CHECK (weekend_id ~ '^[0-9]{4}-week-[0-9]{1,2}$'),
            CONSTRAINT ck_bets_odds_nonzero CHECK (odds IS NULL OR odds <> 0)
        );
    """)
    op.execute("CREATE INDEX idx_bets_weekend_id ON bets (weekend_id, created_at);")
    op.execute("CREATE INDEX idx_bets_participants ON bets USING GIN (participants);")
    op.execute("""
        CREATE TRIGGER trg_bets_updated_at
            BEFORE UPDATE ON bets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE bets IS 'Informal bets between roster users, one settlement run per weekend_id';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")

from ops_dashboard.db.connection import get_db


def init_db() -> None:
    with get_db() as conn:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS loads (
                load_id TEXT PRIMARY KEY,
                origin TEXT NOT NULL,
                destination TEXT NOT NULL,
                pickup_datetime TEXT NOT NULL,
                delivery_datetime TEXT NOT NULL,
                equipment_type TEXT NOT NULL,
                loadboard_rate REAL NOT NULL,
                notes TEXT DEFAULT '',
                weight INTEGER NOT NULL,
                commodity_type TEXT NOT NULL,
                num_of_pieces INTEGER DEFAULT 0,
                miles INTEGER NOT NULL,
                dimensions TEXT DEFAULT ''
            );
            CREATE INDEX IF NOT EXISTS idx_loads_pickup ON loads(pickup_datetime);
            CREATE INDEX IF NOT EXISTS idx_loads_rate ON loads(loadboard_rate);

            CREATE TABLE IF NOT EXISTS call_metrics (
                id TEXT PRIMARY KEY,
                timestamp_utc TEXT NOT NULL,
                agent_name TEXT NOT NULL,
                equipment_type TEXT NOT NULL,
                outcome_tag TEXT NOT NULL,
                sentiment_tag TEXT NOT NULL,
                negotiation_rounds INTEGER NOT NULL,
                loadboard_rate REAL NOT NULL,
                final_rate REAL,
                related_load_id TEXT,
                rejected_rate REAL,
                loads_offered INTEGER
            );
            CREATE INDEX IF NOT EXISTS idx_call_metrics_ts ON call_metrics(timestamp_utc);
            CREATE INDEX IF NOT EXISTS idx_call_metrics_outcome ON call_metrics(outcome_tag);

            CREATE TABLE IF NOT EXISTS carrier_calls (
                id TEXT PRIMARY KEY,
                call_date TEXT NOT NULL,
                agent_name TEXT NOT NULL,
                equipment_type TEXT NOT NULL,
                origin_city TEXT NOT NULL,
                origin_state TEXT NOT NULL,
                destination_city TEXT NOT NULL,
                destination_state TEXT NOT NULL,
                outcome TEXT NOT NULL,
                negotiation_rounds INTEGER NOT NULL,
                listed_rate REAL,
                final_rate REAL,
                sentiment_score REAL NOT NULL,
                call_duration_seconds INTEGER
            );

            CREATE TABLE IF NOT EXISTS geo_points (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                entity_type TEXT NOT NULL,
                entity_id TEXT NOT NULL,
                role TEXT NOT NULL,
                lat REAL NOT NULL,
                lng REAL NOT NULL,
                geohash TEXT NOT NULL,
                country TEXT DEFAULT 'US',
                state TEXT,
                city TEXT,
                timestamp_utc TEXT,
                extras TEXT
            );
            CREATE INDEX IF NOT EXISTS idx_geo_points_entity
                ON geo_points(entity_type, entity_id);

            CREATE TABLE IF NOT EXISTS map_points (
                call_id TEXT PRIMARY KEY,
                load_id TEXT NOT NULL,
                lat REAL NOT NULL,
                lng REAL NOT NULL,
                equipment TEXT NOT NULL,
                loadboard_rate REAL NOT NULL,
                final_rate REAL,
                agent_name TEXT NOT NULL,
                timestamp_utc TEXT NOT NULL,
                origin_city TEXT,
                origin_state TEXT
            );

            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                name TEXT,
                email TEXT,
                phone TEXT,
                image TEXT,
                role TEXT,
                created_at TEXT NOT NULL
            );
        """)

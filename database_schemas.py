# Database schema definitions

USERS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        display_name TEXT NOT NULL,
        username TEXT UNIQUE NOT NULL,  -- stored lower-cased
        email TEXT UNIQUE NOT NULL,     -- stored lower-cased
        password_hash TEXT NOT NULL,
        is_admin BOOLEAN DEFAULT 0,
        is_moderator BOOLEAN DEFAULT 0,
        is_verified BOOLEAN DEFAULT 0,
        is_premium BOOLEAN DEFAULT 0,
        is_banned BOOLEAN DEFAULT 0,
        banned_until TIMESTAMP,
        avatar_url TEXT,
        banner_url TEXT,
        bio TEXT,
        website TEXT,
        location TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
'''

POSTS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        content TEXT NOT NULL CHECK (LENGTH(content) BETWEEN 1 AND 280),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

LIKES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS likes (
        user_id INTEGER NOT NULL,
        post_id INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (user_id, post_id),
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE,
        FOREIGN KEY (post_id) REFERENCES posts (id) ON DELETE CASCADE
    )
'''

FOLLOWS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS follows (
        follower_id INTEGER NOT NULL,
        following_id INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (follower_id, following_id),
        FOREIGN KEY (follower_id) REFERENCES users (id) ON DELETE CASCADE,
        FOREIGN KEY (following_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

REPORTS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS reports (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        reporter_id INTEGER NOT NULL,
        reported_user_id INTEGER,
        reported_post_id INTEGER,
        reason TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'pending' CHECK (status IN ('pending', 'resolved')),
        resolved_by INTEGER,
        resolved_at TIMESTAMP,
        resolution_action TEXT,  -- 'dismiss', 'warn', 'ban', 'delete'
        resolution_notes TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (reporter_id) REFERENCES users (id) ON DELETE CASCADE,
        FOREIGN KEY (reported_user_id) REFERENCES users (id) ON DELETE SET NULL,
        FOREIGN KEY (reported_post_id) REFERENCES posts (id) ON DELETE SET NULL,
        FOREIGN KEY (resolved_by) REFERENCES users (id) ON DELETE SET NULL
    )
'''

# Audit rows are append-only and keep plain ids so they outlive their targets
ADMIN_ACTIONS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS admin_actions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        admin_id INTEGER NOT NULL,
        target_user_id INTEGER NOT NULL,
        action_type TEXT NOT NULL, -- 'ban', 'unban'
        reason TEXT,
        duration_hours INTEGER,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
'''

MODERATION_ACTIONS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS moderation_actions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        moderator_id INTEGER NOT NULL,
        target_post_id INTEGER,
        target_report_id INTEGER,
        action_type TEXT NOT NULL, -- 'delete_post', 'resolve_report'
        reason TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
'''

ALL_TABLE_SCHEMAS = (
    USERS_TABLE_SCHEMA,
    POSTS_TABLE_SCHEMA,
    LIKES_TABLE_SCHEMA,
    FOLLOWS_TABLE_SCHEMA,
    REPORTS_TABLE_SCHEMA,
    ADMIN_ACTIONS_TABLE_SCHEMA,
    MODERATION_ACTIONS_TABLE_SCHEMA,
)

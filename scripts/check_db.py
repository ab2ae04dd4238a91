import sqlite3
import os

db_path = "jobs.db"

def check_db():
    if not os.path.exists(db_path):
        print(f"Error: {db_path} not found")
        return

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    print("Columns in jobs:")
    cursor.execute("PRAGMA table_info(jobs)")
    for col in cursor.fetchall():
        print(f"   * {col[1]} ({col[2]})")

    cursor.execute("SELECT COUNT(*), SUM(deleted_at IS NOT NULL) FROM jobs")
    total, deleted = cursor.fetchone()
    print(f"{total} rows, {deleted or 0} soft-deleted")

    conn.close()

if __name__ == "__main__":
    check_db()

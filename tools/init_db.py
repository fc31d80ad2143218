"""
Crea las tablas del backend SQL local (recipes, profiles).

Ejecutar:
    python tools/init_db.py
"""

import sys
from pathlib import Path

# Agregar el directorio raíz al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from recipe_magic_core.config import get_settings
from recipe_magic_core.db.database import get_db_engine
from recipe_magic_core.db.sql_backend import create_tables


def main():
    settings = get_settings()
    engine = get_db_engine(echo=False)
    create_tables(engine)
    print(f"✅ DB creada/verificada usando DATABASE_URL ({settings.database_url}).")


if __name__ == "__main__":
    main()

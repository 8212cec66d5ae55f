import asyncio
import sys
import os

# Agrega backend/ al PYTHONPATH para importar taller.*
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "backend"))

from taller.core.database import close_db, create_tables, drop_tables


async def reset():
    print("Conectando a la base de datos, eliminando tablas...")
    await drop_tables()
    print("Tablas eliminadas. Creando tablas nuevas...")
    await create_tables()
    await close_db()
    print("Base de datos reiniciada con éxito")


if __name__ == "__main__":
    asyncio.run(reset())

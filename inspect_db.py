from sqlalchemy import create_engine, inspect
from hrm.core.config import settings

engine = create_engine(settings.database_url)
inspector = inspect(engine)

print(f'Database: {settings.database_path}')
print('Existing tables:')
for table in inspector.get_table_names():
    print(f'  - {table}')
    for column in inspector.get_columns(table):
        print(f'      {column["name"]} {column["type"]}')

import sys
from sqlalchemy import inspect, text
import database
import nameguess

config = nameguess.load_config(sys.argv[1] if len(sys.argv) > 1 else 'config.json')
engine, Session = database.create_session_factory(config['database_url'])
ins = inspect(engine)
print('TABLES:', ins.get_table_names())
s = Session()
for t in ['guesses']:
    try:
        cnt = s.execute(text(f"SELECT count(*) FROM {t}")).scalar()
        print(f"{t}: {cnt}")
    except Exception as e:
        print(f"{t}: ERROR {e}")
top = database.get_top_name(s) if 'guesses' in ins.get_table_names() else None
print('TOP NAME:', top)
s.close()

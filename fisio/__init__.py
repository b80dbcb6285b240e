"""
Studio Fisio: query su appuntamenti, pazienti e fisioterapisti.

Struttura:
- dataset.py  : record immutabili e caricamento (JSON o DB)
- services.py : QueryEngine (pazienti per giorno, appuntamenti per fisioterapista)
- db.py       : engine e sessioni SQLAlchemy
- models.py   : tabelle ORM per l'archivio su DB
- seed.py     : import del dataset JSON nel DB
- cli.py      : interfaccia a riga di comando
- api_main.py : API HTTP in sola lettura
- config.py, errors.py, logging_config.py : configurazione, errori, log
"""

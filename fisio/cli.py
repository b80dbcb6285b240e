from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterable, Sequence

from fisio import config
from fisio.dataset import Dataset, load_from_db, load_json
from fisio.db import init_db
from fisio.errors import FisioError
from fisio.logging_config import setup_logging
from fisio.seed import importa_dataset, reset_db
from fisio.services import QueryEngine


def _carica(args: argparse.Namespace) -> Dataset:
    if args.source == "db":
        init_db()  # garantisce tabelle
        return load_from_db()
    return load_json(args.dataset)


def _stampa(records: Iterable[Any], as_json: bool) -> None:
    records = list(records)
    if as_json:
        print(json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2))
        return
    if not records:
        print("Nessun risultato.")
        return
    for r in records:
        if hasattr(r, "appointment_date"):
            print(f"{r.id} | {r.appointment_date} | paziente {r.patient_id} | fisioterapista {r.physiotherapist_id}")
        else:
            print(f"{r.id} | {r.name or '-'}")


def cmd_patients_on(args: argparse.Namespace) -> None:
    engine = QueryEngine(_carica(args))
    _stampa(engine.patients_with_appointment_on(args.date), args.json)


def cmd_appointments_for(args: argparse.Namespace) -> None:
    engine = QueryEngine(_carica(args))
    _stampa(engine.appointments_for_practitioner_named(args.name), args.json)


def cmd_list(args: argparse.Namespace) -> None:
    engine = QueryEngine(_carica(args))
    if args.entity == "pazienti":
        _stampa(engine.list_patients(), args.json)
    elif args.entity == "fisioterapisti":
        _stampa(engine.list_physiotherapists(), args.json)
    elif args.entity == "appuntamenti":
        _stampa(engine.list_appointments(), args.json)


def cmd_import_db(args: argparse.Namespace) -> None:
    ds = load_json(args.dataset)
    init_db()
    if args.reset:
        reset_db()
    n = importa_dataset(ds)
    print(f"Import completato: {n} record inseriti.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fisio", description="Query su appuntamenti, pazienti e fisioterapisti")
    p.add_argument("--dataset", default=str(config.DATASET_PATH), help="File JSON del dataset")
    p.add_argument("--source", choices=["json", "db"], default="json", help="Da dove caricare il dataset")
    sub = p.add_subparsers(required=True)

    p_on = sub.add_parser("patients-on", help="Pazienti con appuntamento in un giorno")
    p_on.add_argument("--date", default=config.DATA_RIFERIMENTO, help="Giorno ISO es: 2023-04-18")
    p_on.add_argument("--json", action="store_true", help="Output JSON")
    p_on.set_defaults(func=cmd_patients_on)

    p_for = sub.add_parser("appointments-for", help="Appuntamenti di un fisioterapista (per nome)")
    p_for.add_argument("--name", required=True)
    p_for.add_argument("--json", action="store_true", help="Output JSON")
    p_for.set_defaults(func=cmd_appointments_for)

    p_list = sub.add_parser("list", help="Lista entità")
    p_list.add_argument("entity", choices=["pazienti", "fisioterapisti", "appuntamenti"])
    p_list.add_argument("--json", action="store_true", help="Output JSON")
    p_list.set_defaults(func=cmd_list)

    p_imp = sub.add_parser("import-db", help="Importa il dataset JSON nel DB")
    p_imp.add_argument("--reset", action="store_true", help="Svuota le tabelle prima dell'import")
    p_imp.set_defaults(func=cmd_import_db)

    return p


def main(argv: Sequence[str] | None = None) -> None:
    setup_logging(config.LOG_LEVEL)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except FisioError as e:
        print(f"Errore: {e}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()

# ===================================================================
# Night Board - main_app.py (entrada headless dos parsers)
# ===================================================================

import argparse
import json
import logging
import logging.handlers
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional

from app.application.container import AppContainer
from app.application.report_parsing_service import ParseKind
from utils.file_operations import atomic_json_write, ensure_dir, read_text_with_fallback
from utils.observability import publish_release_report
from utils.structured_logger import APP_LOGGER_NAME, StructuredLogger

GENERATE = "generate"


def _setup_logging(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(APP_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(name)s - %(message)s')

    # stdout fica reservado para o resultado
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    logs_dir = Path(__file__).resolve().parent / "logs"
    if ensure_dir(logs_dir):
        try:
            fh = logging.handlers.RotatingFileHandler(
                filename=str(logs_dir / f"nightboard_{datetime.now():%Y%m%d}.log"),
                maxBytes=5 * 1024 * 1024,
                backupCount=7,
                encoding='utf-8'
            )
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(formatter)
            logger.addHandler(fh)
        except OSError as e:
            logger.warning(f"Não foi possível inicializar arquivo de log: {e}")
    else:
        logger.warning(f"Não foi possível criar diretório de logs: {logs_dir}")

    logger.propagate = False
    return logger


def to_jsonable(result: Any) -> Any:
    if result is None:
        return None
    if hasattr(result, "to_dict"):
        return result.to_dict()
    if isinstance(result, dict):
        return {key: to_jsonable(value) for key, value in result.items()}
    if isinstance(result, (list, tuple)):
        return [to_jsonable(item) for item in result]
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nightboard",
        description="Converte textos operacionais (RTS, Night Report, HOTO, Telegram) em JSON.",
    )
    parser.add_argument("kind", choices=[k.value for k in ParseKind] + [GENERATE])
    parser.add_argument("file", type=Path, help="Arquivo de texto colado")
    parser.add_argument("--output", type=Path, help="Grava o resultado neste arquivo")
    parser.add_argument("--date", default=date.today().isoformat(), help="Data do Night Report (generate)")
    parser.add_argument("--s-birds", default="", help="Códigos 'S' separados por vírgula (generate)")
    parser.add_argument("--settings", type=Path, help="Arquivo INI de configuração")
    parser.add_argument("--verbose", action="store_true")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logger = _setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        text = read_text_with_fallback(args.file)
    except OSError as e:
        logger.error(f"Falha ao ler {args.file}: {e}")
        print(
            f"Não foi possível ler o arquivo: {args.file}\n"
            "Ação sugerida: verifique o caminho e as permissões.",
            file=sys.stderr,
        )
        return 1

    container = AppContainer(args.settings)

    if args.kind == GENERATE:
        output = container.get_night_report_service().generate(text, args.s_birds, args.date)
    else:
        result = container.get_parsing_service().parse(ParseKind(args.kind), text)
        output = json.dumps(to_jsonable(result), ensure_ascii=False, indent=2)

    if args.output:
        with atomic_json_write(args.output) as f:
            f.write(output)
        logger.info(f"Resultado gravado em {args.output}")
    else:
        print(output)
    return 0


if __name__ == '__main__':
    structured_logger = StructuredLogger(APP_LOGGER_NAME)
    exit_code = 1
    try:
        exit_code = run()
    finally:
        reports_dir = Path(__file__).resolve().parent / "logs" / "observability"
        try:
            publish_release_report(
                structured_logger,
                release_tag=datetime.now().strftime("%Y%m%d_%H%M%S"),
                output_dir=reports_dir,
            )
        except OSError as e:
            logging.getLogger(APP_LOGGER_NAME).debug(
                "Falha ao publicar relatório de observabilidade: %s", e
            )
    sys.exit(exit_code)

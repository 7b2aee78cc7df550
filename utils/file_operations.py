# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - utils/file_operations.py
# Leitura tolerante de texto colado e escrita atômica dos resultados
# ===================================================================

import logging
import os
import tempfile
from pathlib import Path
from contextlib import contextmanager

logger = logging.getLogger("NightReportBoard")


def read_text_with_fallback(filepath: Path) -> str:
    """Lê um arquivo de texto com fallback de encoding.

    Tenta UTF-8 (com ou sem BOM), depois CP1252 (exportações do Windows) e
    por fim UTF-8 substituindo caracteres inválidos.

    Raises:
        OSError: Se o arquivo não puder ser aberto
    """
    data = filepath.read_bytes()

    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError:
        logger.debug(f"Falha UTF-8 em {filepath.name}, tentando CP1252...")

    try:
        text = data.decode('cp1252')
        logger.info(f"Texto carregado com CP1252: {filepath.name}")
        return text
    except UnicodeDecodeError:
        logger.warning(f"Texto carregado com substituição de caracteres: {filepath.name}")
        return data.decode('utf-8', errors='replace')


@contextmanager
def atomic_json_write(filepath: Path):
    """Context manager para escrita atômica e durável de arquivos JSON (ou texto).

    O conteúdo é escrito em arquivo temporário no mesmo diretório, com flush +
    ``os.fsync`` antes do ``os.replace``.
    """
    tmp_fd, tmp_path = tempfile.mkstemp(
        dir=filepath.parent,
        prefix='.tmp_',
        suffix='.json'
    )
    tmp_file = Path(tmp_path)

    try:
        with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
            yield f
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_file), str(filepath))

    except Exception:
        if tmp_file.exists():
            try:
                tmp_file.unlink()
            except OSError:
                pass
        raise


def ensure_dir(directory: Path) -> bool:
    """Garante que um diretório existe, criando-o se necessário."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
        return True
    except OSError:
        return False

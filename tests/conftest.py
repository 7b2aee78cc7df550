import os

# Testes rodam sem display (CI/headless)
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

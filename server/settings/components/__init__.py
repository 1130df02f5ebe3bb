"""Settings components shared helpers."""

from pathlib import Path

from decouple import AutoConfig

# Build paths inside the project like this: BASE_DIR.joinpath('some')
BASE_DIR = Path(__file__).parent.parent.parent.parent

# Loads `.env` file from the `config/` folder when it exists
config = AutoConfig(search_path=BASE_DIR.joinpath('config'))

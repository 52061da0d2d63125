# Point d'entrée uvicorn: `uvicorn main:app --reload`
from quizstore.main import create_app

app = create_app()

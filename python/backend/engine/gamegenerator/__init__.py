from backend.engine.gamegenerator.shuffler import Shuffler

__all__ = ["Shuffler"]

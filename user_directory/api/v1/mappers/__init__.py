from .user_mapper import to_dto, to_entity

__all__ = ["to_dto", "to_entity"]

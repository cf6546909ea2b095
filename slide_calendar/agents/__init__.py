from .calendar_builder import CalendarBuilderAgent

__all__ = ["CalendarBuilderAgent"]

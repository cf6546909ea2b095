from .date_parser import parse_date, parse_date_list

__all__ = ["parse_date", "parse_date_list"]

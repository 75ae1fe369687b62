##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Module for project-wide utility functions.
"""
import logging
from copy import deepcopy
from types import SimpleNamespace
from typing import Any, Dict, List

import yaml


LOG = logging.getLogger(__name__)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def split_order_token(sort_order: str) -> List[str]:
    """
    Split an SQL order token such as `"email DESC"` into its parts.

    Args:
        sort_order: The order token.

    Returns:
        The whitespace-separated parts of the token.
    """
    return sort_order.strip().split()


def get_order_column(sort_order: str) -> str:
    """
    Returns the column of an SQL order token (e.g. `"email ASC"` -> `"email"`).

    Args:
        sort_order: The order token.

    Returns:
        The column part of the token.
    """
    parts = split_order_token(sort_order)
    return parts[0] if parts else ""


def get_order_direction(sort_order: str) -> str:
    """
    Returns the direction of an SQL order token. Only `DESC` (in any case) is
    recognized; everything else sorts ascending.

    Args:
        sort_order: The order token.

    Returns:
        Either "ASC" or "DESC".
    """
    parts = split_order_token(sort_order)
    if len(parts) == 2 and parts[1].upper() == "DESC":
        return "DESC"
    return "ASC"


def ensure_list(value: Any) -> List:
    """
    Wrap a single value in a list, leave lists as they are and turn
    tuples or sets into lists. `None` and `False` become an empty list.

    Args:
        value: The value to normalize.

    Returns:
        A list.
    """
    if value is None or value is False:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def compose_order_argument(raw_order: str) -> str:
    """
    Normalize an SQL order token: keep the column and an `ASC`/`DESC`
    direction (upper-cased) and drop anything else.

    Args:
        raw_order: The order token, e.g. `"email desc"`.

    Returns:
        The normalized token, e.g. `"email DESC"`.
    """
    parts = split_order_token(raw_order or "")
    if not parts:
        return ""
    direction = parts[1].upper() if len(parts) == 2 else ""
    if direction in ("ASC", "DESC"):
        return f"{parts[0]} {direction}"
    return parts[0]

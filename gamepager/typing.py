from typing import Union

import sqlalchemy as sa
import sqlalchemy.orm


# Annotation for SqlAlchemy models
SAModel = type

# Annotation for dict rows (result rows returned as dicts)
SARowDict = dict

# An SqlAlchemy attribute
# That is, the instrumented attribute you get when accessing <model>.<attribute>
SAAttribute = Union[sa.orm.attributes.InstrumentedAttribute, sa.orm.interfaces.MapperProperty]  # type: ignore[name-defined]

# A boolean SQL expression: something you can put into WHERE
SACondition = sa.sql.ColumnElement

# User id of the requester. `None` means an anonymous request
Identity = str

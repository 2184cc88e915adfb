"""
The shape of quotes as clients see them.
"""

from pydantic import BaseModel, Field


class QuoteIn(BaseModel):
    text: str = Field(
        default='',
        description='The quote itself',
        examples=['Talk is cheap. Show me the code.']
    )
    source: str = Field(
        default='',
        description='Who said it, or where it comes from',
        examples=['Linus Torvalds']
    )

class Quote(QuoteIn):
    id: str = Field(
        description='Identifier assigned by the storage backend',
        examples=['65f1c2a9e4b0a1d2c3f4e5a6']
    )

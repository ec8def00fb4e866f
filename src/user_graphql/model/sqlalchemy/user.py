from sqlalchemy import Column, Integer, String

from ...database import Base


class UserModel(Base):
    __tablename__ = "user"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    email = Column(String, nullable=False)

    def __repr__(self):
        return f"<UserModel id={self.id} email={self.email!r}>"

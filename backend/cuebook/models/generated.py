from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class OperatingSchedules(Base):
    __tablename__ = 'operating_schedules'

    weekday = Column(Text, nullable=False)  # "Monday" .. "Sunday"
    open_time = Column(Text, nullable=False)  # "HH:MM:SS"
    close_time = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    is_closed = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))


class ClosedDates(Base):
    __tablename__ = 'closed_dates'

    closed_date = Column(Text, nullable=False, unique=True)  # "YYYY-MM-DD"
    id = Column(Integer, primary_key=True)
    reason = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))


class BilliardTables(Base):
    __tablename__ = 'billiard_tables'

    name = Column(Text, nullable=False, unique=True)
    billiard_type = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'Available'"))
    id = Column(Integer, primary_key=True)
    notes = Column(Text)

    reservations = relationship('Reservations', back_populates='table')


class Durations(Base):
    __tablename__ = 'durations'

    hours = Column(Float, nullable=False, unique=True)
    id = Column(Integer, primary_key=True)


class Reservations(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        Index('ix_reservations_table_date', 'table_id', 'reservation_date'),
    )

    table_id = Column(ForeignKey('billiard_tables.id', ondelete='CASCADE'), nullable=False)
    reservation_date = Column(Text, nullable=False)  # "YYYY-MM-DD"
    start_time = Column(Text, nullable=False)  # "HH:MM:SS"
    end_time = Column(Text, nullable=False)
    duration_hours = Column(Float, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    customer_name = Column(Text)
    notes = Column(Text)

    table = relationship('BilliardTables', back_populates='reservations')

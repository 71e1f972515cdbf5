import datetime

from dateutil.relativedelta import relativedelta
from django.utils import timezone


def start_of_day(day: datetime.date) -> datetime.datetime:
    return timezone.make_aware(datetime.datetime.combine(day, datetime.time.min))


def end_of_day(day: datetime.date) -> datetime.datetime:
    return timezone.make_aware(datetime.datetime.combine(day, datetime.time.max))


def get_first_day_of_current_week(current_date: datetime.date) -> datetime.date:
    return current_date - datetime.timedelta(days=current_date.weekday())


def get_last_day_of_current_week(current_date: datetime.date) -> datetime.date:
    return get_first_day_of_current_week(current_date) + datetime.timedelta(days=6)


def get_first_day_of_current_month(current_date: datetime.date) -> datetime.date:
    return current_date.replace(day=1)


def get_last_day_of_current_month(current_date: datetime.date) -> datetime.date:
    return get_first_day_of_current_month(current_date) + relativedelta(months=1, days=-1)


def get_first_day_of_current_year(current_date: datetime.date) -> datetime.date:
    return current_date.replace(month=1, day=1)


def get_last_day_of_current_year(current_date: datetime.date) -> datetime.date:
    return current_date.replace(month=12, day=31)

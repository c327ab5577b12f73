import copy
import logging


logger = logging.getLogger(__name__)


class FieldDescriptor(object):
    """Wrapper around field access of a Field related class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.field_name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.field_name not in data:
            self.logger.debug("create new field for field named '%s'", self.field.field_name)
            data[self.field.field_name] = self.field.create(father=instance)

        return data[self.field.field_name]

    def __set__(self, instance, value):
        raise AttributeError(f"field '{self.field.field_name}' of {instance.__class__.__name__} is read-only")


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if getattr(cls, name, None) is None:
            setattr(cls, name, FieldDescriptor(self, name))
        else:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Fields of a Chunk class, in the order they are unpacked"""

    def __init__(self, fields=None):
        self.fields = list(fields or [])


def is_field(value):
    return hasattr(value, 'contribute_to_chunk')


class MetaChunk(type):
    '''Class attributes that are fields are not left in the class namespace:
    each one becomes a FieldDescriptor and its name is recorded in _meta.

    The fields of the base chunks come first.'''

    def __new__(mcs, name, bases, attrs):
        namespace = {key: value for key, value in attrs.items() if not is_field(value)}
        new_cls = super().__new__(mcs, name, bases, namespace)

        inherited = [_ for base in bases if isinstance(base, MetaChunk) for _ in base._meta.fields]
        new_cls._meta = Meta(dict.fromkeys(inherited))

        for field_name, field in attrs.items():
            if is_field(field):
                new_cls.add_to_class(field_name, field)

        return new_cls

    def add_to_class(cls, name, value):
        '''It's possible to add a field after the class is defined, useful for
        records that (indirectly) contain themselves.'''
        if not is_field(value):
            setattr(cls, name, value)
            return

        logger.debug('adding field \'%s\' to %s' % (name, cls.__name__))
        cls._meta.fields.append(name)
        value.contribute_to_chunk(cls, name)

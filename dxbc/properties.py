import logging
from typing import List, Tuple, Type

from .meta import FieldBase


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_class_name(instance, name):
    return get_instance_from_chunk(instance, condition=lambda x: x.__class__.__name__ == name)


def get_instance_from_chunk(instance, condition):
    father = instance

    while father is not None and not condition(father):
        father = father.father

    if father is None:
        raise AttributeError(f'no father of {instance.__class__.__name__} satisfies the condition')

    return father


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class ConstantBuffer(Chunk):
            var_count  = fields.StructField('I')
            var_offset = fields.StructField('I')
            variables  = fields.ArrayField(ShaderVariable(), n=Dependency('.var_count'), offset=Dependency('.var_offset'))

    and have the number of elements and the position of the array strictly connected
    to the fields named 'var_count' and 'var_offset'.

    The syntax for defining the expression is inspired from module resolution
    with an extra element via the first char of the expression: we have the following

     - '.' indicates we refer to a field at the same level
     - '@' indicates the the first component is the name of a class, looked up
       between the fathers of the field
     - otherwise the resolution starts from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def _resolve_wrt_class(self, instance, fields_path: List[str]) -> Tuple[Type["Field"], List[str]]:
        class_name = fields_path[0][1:]
        self.logger.debug('resolve from class name: \'%s\'' % class_name)
        field = get_instance_from_class_name(instance, class_name)

        return field, fields_path[1:]  # skip the first one that is already resolved

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' using class \'%s\'' % (
            self.expression,
            self.__class__.__name__,
        ))

        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']
        fields_path = self.expression.split('.')

        # find the root the resolution starts
        if fields_path[0] != '':
            if fields_path[0].startswith('@'):
                field, fields_path = self._resolve_wrt_class(instance, fields_path)
            else:
                field = get_root_from_chunk(instance)
                self.logger.debug(' resolve from root: \'%s\'' % field.__class__.__name__)
        else:  # we have a relative dependency
            field = instance.father
            self.logger.debug(' resolve from father: \'%s\'' % field.__class__.__name__)
            fields_path = fields_path[1:]  # skip the first one that is empty

        for component_name in fields_path:
            field = getattr(field, component_name)
            self.logger.debug(' resolved sub-component "%s" from "%s"' % (
                field.__class__.__name__, component_name))

        return field

    def _do_resolve(self, field):
        # plain attributes of a field (like computed properties) are used as they are
        value = field.value if isinstance(field, FieldBase) else field

        self.logger.debug(' resolved with value %s' % (value,))

        return value

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self._do_resolve(self.resolve_field(instance))


class RatioDependency(Dependency):

    def __init__(self, ratio, expression):
        super().__init__(expression)
        self._ratio = ratio

    def resolve(self, instance):
        value = super().resolve(instance)

        return value // self._ratio


class NonZero(Dependency):
    '''Resolves to True when the referenced field is not zero, typical of
    offsets where zero means "absent".'''

    def resolve(self, instance):
        return super().resolve(instance) != 0


class AtLeast(Dependency):
    '''Resolves to True when the referenced field is greater or equal than the
    threshold; used to gate fields on the version of the format.'''

    def __init__(self, expression, threshold):
        super().__init__(expression)
        self._threshold = threshold

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression} >= {self._threshold})>'

    def resolve(self, instance):
        return super().resolve(instance) >= self._threshold


def resolve_property(instance, value):
    '''It returns the value itself or the resolved one if it's a Dependency'''
    if isinstance(value, Dependency):
        return value.resolve(instance)

    return value

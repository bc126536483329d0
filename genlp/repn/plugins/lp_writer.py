#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import logging

from genlp.common.config import (
    Bool,
    ConfigBlock,
    ConfigValue,
    document_kwargs_from_configdict,
)
from genlp.common.enums import ConstraintOperator, ObjectiveSense
from genlp.common.timing import TicTocTimer
from genlp.core.base.label import NumericLabeler, TextLabeler
from genlp.core.expr.numvalue import Unbounded

logger = logging.getLogger('genlp.repn')

ONE_VAR_CONSTANT = 'ONE_VAR_CONSTANT'


def _num2str(val):
    # Integral floats are written without the trailing '.0'
    if val.__class__ is float and val.is_integer() and abs(val) < 1e15:
        return str(int(val))
    return str(val)


def _bound2str(val, inf):
    if val.__class__ is Unbounded:
        return inf
    return _num2str(val)


class LPWriterInfo(object):
    """Return type for LPWriter.write()

    Attributes
    ----------
    symbol_map: dict

        Map from the row/column labels used in the LP file to the
        variable and constraint names of the model.

    """

    def __init__(self, symbol_map):
        self.symbol_map = symbol_map


class LPWriter(object):
    CONFIG = ConfigBlock('lpwriter')
    CONFIG.declare(
        'show_section_timing',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Print timing after writing each section of the LP file',
        ),
    )
    CONFIG.declare(
        'skip_trivial_constraints',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Skip writing constraints whose body is constant',
        ),
    )
    CONFIG.declare(
        'symbolic_solver_labels',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Write variables/constraints using model names',
            doc="""
            Export variables and constraints to the LP file using
            human-readable text names derived from the corresponding
            model names.  Characters not allowed in LP labels are
            replaced.""",
        ),
    )
    CONFIG.declare(
        'row_order',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Write constraints sorted by name',
            doc="""
            If False, constraints are written in the order they were
            added to the model.""",
        ),
    )
    CONFIG.declare(
        'column_order',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Order variables by name',
            doc="""
            If False, terms within each row are written in the order the
            variables were declared.  Note that the LP file format is
            row-major: columns are numbered in the order in which
            variables first appear in the objective followed by each
            constraint.""",
        ),
    )

    def __init__(self):
        self.config = self.CONFIG()

    def __call__(self, model, filename, **options):
        if filename is None:
            filename = (model.name or 'unknown') + ".lp"
        with open(filename, 'w', newline='') as FILE:
            info = self.write(model, FILE, **options)
        return filename, info.symbol_map

    @document_kwargs_from_configdict(CONFIG)
    def write(self, model, ostream, **options):
        """Write a model in LP format.

        Returns
        -------
        LPWriterInfo

        Parameters
        ----------
        model: ModelStore
            The model to write out.

        ostream: io.TextIOBase
            The text output stream where the LP "file" will be written.
            Could be an opened file or a io.StringIO.

        """
        config = self.config(options)
        return _LPWriter_impl(ostream, config).write(model)


class _LPWriter_impl(object):
    def __init__(self, ostream, config):
        self.ostream = ostream
        self.config = config
        self.symbol_map = None

    def write(self, model):
        timer = TicTocTimer(logger=logger)
        if self.config.show_section_timing:
            timer.level = logging.INFO
        else:
            timer.level = logging.DEBUG

        ostream = self.ostream

        if self.config.symbolic_solver_labels:
            self.var_labeler = self.con_labeler = TextLabeler()
        else:
            self.var_labeler = NumericLabeler('x')
            self.con_labeler = NumericLabeler('c')
        self.symbol_map = {}
        self.var_symbol = {ONE_VAR_CONSTANT: ONE_VAR_CONSTANT}

        variables = list(model.iter_variables())
        if any(v.name == ONE_VAR_CONSTANT for v in variables):
            raise ValueError(
                "The model ('%s') declares a variable named '%s', which is "
                "reserved by the LP writer" % (model.name, ONE_VAR_CONSTANT)
            )
        if self.config.column_order:
            variables.sort(key=lambda v: v.name)
        self.var_map = {v.name: v for v in variables}
        self.var_order = {name: i for i, name in enumerate(self.var_map)}
        self.var_order[ONE_VAR_CONSTANT] = -1

        timer.toc('Initialized column order')

        ostream.write(f"\\* Source GenLP model name={model.name} *\\\n\n")

        #
        # Process objective
        #
        ostream.write(
            "min \nobj:\n" if model.sense == ObjectiveSense.minimize else "max \nobj:\n"
        )
        linear = dict(model.objective.linear)
        constant = model.objective.constant
        if constant or not linear:
            # Most LP readers do not accept a constant in the objective
            # (or an empty objective): write it as the coefficient of a
            # column fixed to 1.
            linear[ONE_VAR_CONSTANT] = constant
        self.write_expression(ostream, linear)
        timer.toc('Objective')

        ostream.write("\ns.t.\n")

        #
        # Tabulate constraints
        #
        skip_trivial_constraints = self.config.skip_trivial_constraints
        have_nontrivial = False
        constraints = list(model.iter_constraints())
        if self.config.row_order:
            constraints.sort(key=lambda c: c.name)
        for con in constraints:
            lb, ub = con.bounds()
            if lb is None and ub is None:
                # Unbounded constraints cannot be written in LP format
                continue
            linear = dict(con.lhs.linear)
            if linear:
                have_nontrivial = True
            else:
                if skip_trivial_constraints:
                    continue
                # Constant rows are left for the solver to judge; LP
                # readers need a column on the left-hand side.
                linear[ONE_VAR_CONSTANT] = 0

            symbol = self.con_labeler(con.name)
            if con.operator is ConstraintOperator.eq:
                label = f'c_e_{symbol}_'
                rhs = '= ' + _num2str(lb)
            elif con.operator is ConstraintOperator.ge:
                label = f'c_l_{symbol}_'
                rhs = '>= ' + _num2str(lb)
            else:
                label = f'c_u_{symbol}_'
                rhs = '<= ' + _num2str(ub)
            self._add_symbol(label, con.name)
            ostream.write(f'\n{label}:\n')
            self.write_expression(ostream, linear)
            ostream.write(rhs + '\n')

        if not have_nontrivial:
            # Some solvers reject a model with no constraints
            ostream.write('\nc_e_ONE_VAR_CONSTANT:\n')
            self.write_expression(ostream, {ONE_VAR_CONSTANT: 1})
            ostream.write('= 1\n')
        timer.toc('Constraints')

        ostream.write("\nbounds")

        integer_vars = []
        binary_vars = []
        if ONE_VAR_CONSTANT in self.symbol_map:
            ostream.write(f"\n   1 <= {ONE_VAR_CONSTANT} <= 1")
        for name, v in self.var_map.items():
            # Only variables appearing in a written row get a column
            v_symbol = self.var_symbol.get(name)
            if v_symbol is None:
                continue
            if v.is_binary():
                binary_vars.append(v_symbol)
                if v.lb == 0 and v.ub == 1:
                    continue
            elif v.is_integer():
                integer_vars.append(v_symbol)
            lb = _bound2str(v.lb, '-inf')
            ub = _bound2str(v.ub, '+inf')
            ostream.write(f"\n   {lb} <= {v_symbol} <= {ub}")

        if integer_vars:
            ostream.write("\ngeneral\n  ")
            ostream.write("\n  ".join(integer_vars))

        if binary_vars:
            ostream.write("\nbinary\n  ")
            ostream.write("\n  ".join(binary_vars))

        timer.toc("Wrote variable bounds and domains")

        ostream.write("\nend\n")

        info = LPWriterInfo(self.symbol_map)
        timer.toc("Generated LP representation", delta=False)
        return info

    def _add_symbol(self, label, name):
        known = self.symbol_map.get(label)
        if known is not None and known != name:
            raise ValueError(
                "Duplicate LP label '%s': generated for both '%s' and '%s'"
                % (label, known, name)
            )
        self.symbol_map[label] = name
        return label

    def get_var_symbol(self, name):
        ans = self.var_symbol.get(name)
        if ans is None:
            ans = self.var_symbol[name] = self._add_symbol(
                self.var_labeler(name), name
            )
        elif name == ONE_VAR_CONSTANT:
            self.symbol_map[ONE_VAR_CONSTANT] = ONE_VAR_CONSTANT
        return ans

    def write_expression(self, ostream, linear):
        getSymbol = self.get_var_symbol
        getVarOrder = self.var_order.__getitem__
        for name, coef in sorted(linear.items(), key=lambda x: getVarOrder(x[0])):
            if coef < 0:
                ostream.write(f'{_num2str(coef)} {getSymbol(name)}\n')
            else:
                ostream.write(f'+{_num2str(coef)} {getSymbol(name)}\n')

#!/usr/bin/env python
'''Generic functions used to read control files. A control file is made up of
namelists of the form

&name {
    card = value;
};;

Lines starting with '#' are ignored.
'''

import re

input_style = re.compile(r'\s*(?P<par>[^=]+?)\s*=\s*[\'"]?(?P<value>[^\'";]*)[\'"]?\s*;')
namelist_style = re.compile(r'&(?P<name>\w+)\s*{')


def control_lines(lines):
    '''Constructs a dictionary containing the (unformatted) values for all
    cards in the namelists contained in <lines>.
    '''

    sim_parameters = dict()
    in_namelist = False
    for line in lines:
        temp = line.strip()
        if not temp or temp.startswith('#'):
            continue
        if temp.startswith('&'):
            found = namelist_style.search(temp)
            if not found:
                raise ValueError("Malformed namelist header: {}".format(temp))
            card_name = found.group('name')
            sim_parameters[card_name] = dict()
            in_namelist = True
            continue
        if in_namelist:
            # a card may share its line with the terminator
            card_str, end, _ = temp.partition('};;')
            card_str = card_str.strip()
            if card_str:
                inp = input_style.match(card_str)
                if not inp:
                    raise ValueError("Cannot parse card: {}".format(temp))
                sim_parameters[card_name][inp.group('par').strip()] = \
                                                    inp.group('value').strip()
            if end:
                in_namelist = False

    if in_namelist:
        raise ValueError("Namelist {} is not terminated.".format(card_name))

    return sim_parameters


def control_file(filename):
    '''Opens the control file <filename> and constructs a dictionary
    containing the (unformatted) values for all simulation parameters.
    '''

    with open(filename) as f:
        return control_lines(f)


def change_type(top_dict, namelist, card, new_type):
    '''Converts the string in the specified <card> in <namelist> to the
    required type.
    '''

    try:
        top_dict[namelist][card] = new_type(top_dict[namelist][card])
    except ValueError:
        raise ValueError("Invalid value {} for card {} in namelist {}.".format(
                                 top_dict[namelist][card], card, namelist))


def to_bool(in_str):
    '''Reads a boolean card. Only "True" and "False" (in any case) are
    accepted, since bool("False") is True.
    '''

    value = in_str.strip().lower()
    if value not in ('true', 'false'):
        raise ValueError("{} is not a boolean value.".format(in_str))

    return value == 'true'


def format_control(control_dict, print_types=True):
    '''Formats the cards of every namelist in <control_dict>, one card per
    line, optionally with the type of each value.
    '''

    lines = []
    for name, cards in control_dict.items():
        lines.append("&{}".format(name))
        for card, value in cards.items():
            if print_types:
                lines.append("    {} = {!r} ({})".format(card, value,
                                                   type(value).__name__))
            else:
                lines.append("    {} = {!r}".format(card, value))

    return '\n'.join(lines)


def print_control(control_dict, print_types=True):
    '''Prints the processed control parameters. Useful when adding new cards.
    '''

    print(format_control(control_dict, print_types=print_types))

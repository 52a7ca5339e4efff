import configparser
import os
from agentneat.activations import ActivationType

class Config:

    ALGORITHMS = ("neat", "hyperneat")

    @staticmethod
    def _parse_activation_name(raw_name: str) -> str:
        """
        Validate an activation function name read from the configuration.

        Parameters:
            raw_name: one of the ActivationType values, or "random"

        Returns:
            The (stripped) activation name
        """
        name = raw_name.strip()
        valid = [activation.value for activation in ActivationType] + ['random']
        if name not in valid:
            raise ValueError(f"Invalid activation function '{name}'")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the default values,
                         whose attributes can then be set manually.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 100
            self.num_inputs      = 2
            self.num_outputs     = 1
            self.algorithm       = "neat"
            self.random_seed     = None

            # Node defaults
            self.activation_initial      = "logistic"
            self.cppn_activation_initial = "random"
            self.prelu_slope_init        = 4.0
            self.slope_mutate_prob       = 0.2
            self.slope_step              = 1.0

            # Connection defaults
            self.min_weight              = -1.0
            self.max_weight              = 1.0
            self.weight_mutate_prob      = 0.8
            self.weight_replace_prob     = 0.1
            self.weight_perturb_strength = 0.02

            # Structural mutation defaults
            self.connection_add_probability = 0.15
            self.node_add_probability       = 0.05

            # Speciation defaults
            self.compatibility_threshold    = 0.3
            self.distance_disjoint_coeff    = 1.0
            self.distance_weight_coeff      = 0.5
            self.no_match_weight_difference = 100.0
            self.small_genome_threshold     = 20

            # Reproduction and stagnation defaults
            self.crossover_probability = 0.05
            self.cull_fraction         = 0.5
            self.max_stagnation_period = 10

            # Substrate defaults (HyperNEAT only)
            self.substrate_size             = 11
            self.substrate_activation       = "logistic"
            self.substrate_weight_threshold = 0.0002

            # Termination defaults
            self.max_number_generations    = 100
            self.fitness_termination_check = False
            self.fitness_criterion         = "max"
            self.fitness_threshold         = 0.0
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION]

        # The number of agents, each controlled by the network of its own genome.
        self.population_size = get_value('POPULATION', 'population_size', int)

        # The number of input nodes (length of the vision vector).
        self.num_inputs = get_value('POPULATION', 'num_inputs', int)

        # The number of output nodes (length of the action vector).
        self.num_outputs = get_value('POPULATION', 'num_outputs', int)

        # Which algorithm family to evolve.
        # Allowed values:
        #   "neat"      - genomes directly encode the agents' networks
        #   "hyperneat" - genomes are CPPNs painting the weights of a fixed substrate
        self.algorithm = get_value('POPULATION', 'algorithm', str, default="neat")
        if self.algorithm not in self.ALGORITHMS:
            raise ValueError(f"Invalid algorithm '{self.algorithm}', expected one of {self.ALGORITHMS}")

        # Seed for the random number generators; "None" leaves them unseeded.
        self.random_seed = get_value('POPULATION', 'random_seed', int, default=None)

        # [NODE]

        # Activation function for hidden and output nodes of directly encoded networks.
        # Options: logistic, tanh, prelu, swish, or "random" (one drawn per node).
        self.activation_initial = self._parse_activation_name(
            get_value('NODE', 'activation_initial', str, default="logistic"))

        # Activation function for the nodes of a CPPN (HyperNEAT only).
        self.cppn_activation_initial = self._parse_activation_name(
            get_value('NODE', 'cppn_activation_initial', str, default="random"))

        # The slope applied to negative inputs by a newly created "prelu" node.
        self.prelu_slope_init = get_value('NODE', 'prelu_slope_init', float, default=4.0)

        # The probability that mutation will nudge the slope of a random "prelu" hidden node.
        self.slope_mutate_prob = get_value('NODE', 'slope_mutate_prob', float, default=0.2)

        # The amount added to the slope by one slope mutation.
        self.slope_step = get_value('NODE', 'slope_step', float, default=1.0)

        # [CONNECTION]

        # The minimum and maximum allowed 'weight' values.
        # New weights are drawn uniformly from this range; mutated weights are clamped to it.
        self.min_weight = get_value('CONNECTION', 'min_weight', float, default=-1.0)
        self.max_weight = get_value('CONNECTION', 'max_weight', float, default=1.0)

        # The probability that a given link has its weight mutated.
        self.weight_mutate_prob = get_value('CONNECTION', 'weight_mutate_prob', float, default=0.8)

        # Given that a weight is mutated, the probability that it is replaced by
        # a new random value rather than perturbed.
        self.weight_replace_prob = get_value('CONNECTION', 'weight_replace_prob', float, default=0.1)

        # The standard deviation of the zero-centered normal distribution
        # from which a 'weight' perturbation value is drawn.
        self.weight_perturb_strength = get_value('CONNECTION', 'weight_perturb_strength', float, default=0.02)

        # [STRUCTURAL MUTATIONS]

        # The probability that mutation will add a link between two unconnected nodes.
        self.connection_add_probability = get_value('STRUCTURAL_MUTATIONS', 'connection_add_probability', float)

        # The probability that mutation will split an enabled link with a new hidden node.
        self.node_add_probability = get_value('STRUCTURAL_MUTATIONS', 'node_add_probability', float)

        # [SPECIATION]

        # Genomes whose distance is less than or equal to this
        # threshold are considered to be in the same species.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float)

        # The coefficient for the disjoint gene count's contribution to the distance.
        self.distance_disjoint_coeff = get_value('SPECIATION', 'distance_disjoint_coeff', float)

        # The coefficient for the average weight difference of matching genes.
        self.distance_weight_coeff = get_value('SPECIATION', 'distance_weight_coeff', float)

        # The weight difference assumed when two genomes share no gene at all.
        self.no_match_weight_difference = get_value('SPECIATION', 'no_match_weight_difference', float, default=100.0)

        # Genomes with fewer links than this are not normalized by their size.
        self.small_genome_threshold = get_value('SPECIATION', 'small_genome_threshold', int, default=20)

        # [REPRODUCTION]

        # The probability that an offspring is produced by crossover instead of cloning.
        self.crossover_probability = get_value('REPRODUCTION', 'crossover_probability', float)

        # The fraction of each species that survives culling.
        self.cull_fraction = get_value('REPRODUCTION', 'cull_fraction', float)

        # [STAGNATION]

        # Species that have not shown improvement in more than this
        # number of generations will be considered stagnant and removed.
        self.max_stagnation_period = get_value('STAGNATION', 'max_stagnation_period', int)

        # [SUBSTRATE] (HyperNEAT only)

        # The side of each of the three square layers of the substrate.
        self.substrate_size = get_value('SUBSTRATE', 'substrate_size', int, default=11)

        # Activation function for the sandwich and output layers of the substrate.
        self.substrate_activation = self._parse_activation_name(
            get_value('SUBSTRATE', 'substrate_activation', str, default="logistic"))

        # CPPN outputs smaller than this (in absolute value) are written as 0.
        self.substrate_weight_threshold = get_value('SUBSTRATE', 'substrate_weight_threshold', float, default=0.0002)

        # [TERMINATION]

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int)

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # The function used to compute the termination criterion.
        # Allowed values:
        #   "mean" the average fitness across the entire population
        #   "max"  the fitness of the fittest agent in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, default="max")

        # The fitness value which when met or exceeded causes the run to end.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=0.0)
